"""
Contract Validation Module

Validation of raw chain table rows against the row contracts
(contracts/schema/*.json) and conversion into snapshot models.
"""

from .validators import (
    ContractValidator,
    PowerupStateValidator,
    RamStateValidator,
    RexStateValidator,
    SchemaLoader,
    UsageSampleValidator,
    parse_powerup_state,
    parse_ram_state,
    parse_rex_state,
    parse_usage_sample,
    validate_powerup_state,
    validate_ram_state,
    validate_rex_state,
    validate_usage_sample,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PowerupStateValidator",
    "RexStateValidator",
    "RamStateValidator",
    "UsageSampleValidator",
    # Validation
    "validate_powerup_state",
    "validate_rex_state",
    "validate_ram_state",
    "validate_usage_sample",
    # Parsing
    "parse_powerup_state",
    "parse_rex_state",
    "parse_ram_state",
    "parse_usage_sample",
]
