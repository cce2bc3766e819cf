"""Utility functions for musbank."""

from musbank.utils.names import decode_name, unique_names
from musbank.utils.validation import BankError, validate_magic, validate_region

__all__ = [
    "decode_name",
    "unique_names",
    "BankError",
    "validate_magic",
    "validate_region",
]
