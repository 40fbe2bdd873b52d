from coatings.specification.errors import ValidationError
from coatings.specification.parser import (
    Dialect,
    dialect_for,
    parse_specification,
    parse_specification_or_raise,
    validate_save,
)
from coatings.specification.result import ParseResult

__all__ = [
    "Dialect",
    "ParseResult",
    "ValidationError",
    "dialect_for",
    "parse_specification",
    "parse_specification_or_raise",
    "validate_save",
]
