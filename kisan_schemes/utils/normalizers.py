"""
Key and value normalization shared by the matcher and the dataset loader
"""
import math
import re
from typing import Any, Dict, Mapping, Optional

_WHITESPACE_RUN = re.compile(r'\s+')
_NUMERIC_NOISE = re.compile(r'[,₹\s]')


def normalize_key(key: Any) -> str:
    """
    Canonicalize a field name so farmer keys line up with ruleset headers

    "Land Size", "land_size" and "  Land   Size " all become "land_size".

    Args:
        key: Raw header label or farmer answer key

    Returns:
        Lower-cased, trimmed key with whitespace runs collapsed to "_"
    """
    return _WHITESPACE_RUN.sub('_', str(key).strip().lower())


def normalize_farmer_input(farmer_input: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build a new answer map keyed by normalized keys

    Args:
        farmer_input: Raw field name -> answer mapping

    Returns:
        Normalized copy; on key collisions the later entry wins
    """
    return {normalize_key(key): value for key, value in farmer_input.items()}


def parse_numeric(value: Any) -> Optional[float]:
    """
    Coerce numeric-looking values such as "₹1,200" or " 3.5 " into a number

    Args:
        value: Cell or answer value of any type

    Returns:
        The number, or None when the value is blank or not numeric
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None

    text = _NUMERIC_NOISE.sub('', str(value))
    if not text or '_' in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def is_blank(value: Any) -> bool:
    """True for None and for values whose text is empty after trimming"""
    return value is None or str(value).strip() == ""
