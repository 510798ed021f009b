"""
JSON Schema Contract Validators

Validation of raw table rows (as returned by the chain's get_table_rows
JSON API) against the row contracts, before they are turned into
snapshot models.

Schemas:
- powerup_state.json (primary leasing market)
- rex_state.json     (legacy linear staking pool)
- ram_state.json     (legacy constant-product market)
- usage_sample.json  (reference account scalars)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.market_state import (
    LegacyExchangeMarketState,
    LegacyLinearMarketState,
    PrimaryMarketState,
)
from src.core.domain.usage import UsageSample


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader of JSON Schema files.

    Schemas are looked up in contracts/schema/ at the repository root.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Repository root is 4 levels above this file
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'powerup_state')

        Returns:
            Parsed schema

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Validation of row data against one JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: If data does not match the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Yield a ValidationError for every violation found."""
        return self.validator.iter_errors(data)


class PowerupStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("powerup_state")


class RexStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("rex_state")


class RamStateValidator(ContractValidator):
    def __init__(self):
        super().__init__("ram_state")


class UsageSampleValidator(ContractValidator):
    def __init__(self):
        super().__init__("usage_sample")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_powerup_state(data: Dict[str, Any]) -> None:
    PowerupStateValidator().validate(data)


def validate_rex_state(data: Dict[str, Any]) -> None:
    RexStateValidator().validate(data)


def validate_ram_state(data: Dict[str, Any]) -> None:
    RamStateValidator().validate(data)


def validate_usage_sample(data: Dict[str, Any]) -> None:
    UsageSampleValidator().validate(data)


def parse_powerup_state(row: Dict[str, Any]) -> PrimaryMarketState:
    """
    Validate a powup.state row and build its snapshot.

    Raises:
        jsonschema.ValidationError: Row shape does not match the contract
        pydantic.ValidationError: Row values violate model constraints
    """
    validate_powerup_state(row)
    return PrimaryMarketState.model_validate(row)


def parse_rex_state(row: Dict[str, Any]) -> LegacyLinearMarketState:
    """Validate a rexpool row and build its snapshot."""
    validate_rex_state(row)
    return LegacyLinearMarketState.model_validate(row)


def parse_ram_state(row: Dict[str, Any]) -> LegacyExchangeMarketState:
    """Validate a rammarket row and build its snapshot."""
    validate_ram_state(row)
    return LegacyExchangeMarketState.model_validate(row)


def parse_usage_sample(data: Dict[str, Any]) -> UsageSample:
    """Validate a usage sample payload and build it."""
    validate_usage_sample(data)
    return UsageSample.model_validate(data)
