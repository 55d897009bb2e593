"""
Utility functions for the Kisan Scheme Matcher
"""

from .normalizers import (
    normalize_key,
    normalize_farmer_input,
    parse_numeric,
    is_blank
)
from .validators import (
    validate_profile_name,
    validate_farmer_input
)

__all__ = [
    "normalize_key",
    "normalize_farmer_input",
    "parse_numeric",
    "is_blank",
    "validate_profile_name",
    "validate_farmer_input"
]
