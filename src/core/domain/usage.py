"""
UsageSample — Reference account scalars for unit/weight conversion

A usage sample holds, per resource, "chain-wide capacity units per
reference account's stake weight", scaled by the chain's sample precision.
It is derived by the chain-state provider from one account's resource
limits and stake weights and is only ever used as a conversion scalar.
"""

from pydantic import BaseModel, Field

from src.core.config import ChainConstants
from src.core.domain.units import ResourceName
from src.core.math.fixed_point import div_ceil


class UsageSample(BaseModel):
    """
    Sampled conversion scalars (one per resource).
    """

    cpu: int = Field(..., gt=0, description="μs per stake weight × sample precision")
    net: int = Field(..., gt=0, description="bytes per stake weight × sample precision")

    model_config = {"frozen": True}

    def for_resource(self, name: ResourceName) -> int:
        """Return the scalar of the named resource ('cpu' or 'net')."""
        if name == "cpu":
            return self.cpu
        if name == "net":
            return self.net
        raise ValueError(f"Unknown resource: {name!r}")

    @classmethod
    def from_account_limits(
        cls,
        cpu_limit_max: int,
        net_limit_max: int,
        cpu_weight: int,
        net_weight: int,
        constants: ChainConstants | None = None,
    ) -> "UsageSample":
        """
        Derive a sample from a reference account.

        sample = ceil(limit_max * sample_precision / weight)

        Args:
            cpu_limit_max: Account's max CPU limit (μs)
            net_limit_max: Account's max NET limit (bytes)
            cpu_weight: Account's CPU stake weight
            net_weight: Account's NET stake weight
            constants: Chain constants (default: ChainConstants())

        Returns:
            UsageSample

        Raises:
            ValueError: If a weight is not positive
        """
        constants = constants or ChainConstants()
        if cpu_weight <= 0 or net_weight <= 0:
            raise ValueError(
                f"Stake weights must be positive, got cpu={cpu_weight} net={net_weight}"
            )
        precision = constants.sample_precision
        return cls(
            cpu=div_ceil(cpu_limit_max * precision, cpu_weight),
            net=div_ceil(net_limit_max * precision, net_weight),
        )
