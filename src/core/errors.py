"""
Pricing Errors — Error taxonomy of the pricing engine

Every public pricing operation either returns a complete result or raises
one of the exceptions below. None of them is retried internally: all
operations are deterministic, so the same inputs produce the same error.

Recoverability:
- InvalidDecayConstant  — fatal for the snapshot (decay cannot be computed)
- BelowPrecision        — recoverable, request a larger amount
- BelowMinimumPayment   — recoverable, request more or lower the floor
- InsufficientLiquidity — recoverable, request a smaller amount
"""


class PricingError(Exception):
    """Base class for all pricing engine failures."""

    pass


class InvalidDecayConstant(PricingError):
    """
    decay_secs <= 0 in a resource curve snapshot.

    The exponential cool-down of adjusted utilization divides by the decay
    constant, so no quote can be produced for this snapshot.
    """

    def __init__(self, decay_secs: int):
        self.decay_secs = decay_secs
        super().__init__(
            f"Invalid decay constant: decay_secs={decay_secs} must be > 0"
        )


class BelowPrecision(PricingError):
    """
    The computed price rounds to zero at instrument precision for a
    non-zero request.
    """

    def __init__(self, resource: str, amount: int, unit: str):
        self.resource = resource
        self.amount = amount
        self.unit = unit
        super().__init__(
            f"Price for requested {resource.upper()} amount ({amount}{unit}) "
            f"below required precision, increase requested amount."
        )


class BelowMinimumPayment(PricingError):
    """The computed price is lower than the caller-supplied payment floor."""

    def __init__(self, resource: str, amount: int, unit: str, price, min_payment):
        self.resource = resource
        self.amount = amount
        self.unit = unit
        self.price = price
        self.min_payment = min_payment
        super().__init__(
            f"Price ({price}) for requested {resource.upper()} amount "
            f"({amount}{unit}) below minimum required payment ({min_payment}), "
            f"increase requested {resource.upper()} amount."
        )


class InsufficientLiquidity(PricingError):
    """
    Constant-product request is as large as (or larger than) the pool's
    base balance.
    """

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient liquidity: requested {requested} units, "
            f"pool base balance is {available} units"
        )
