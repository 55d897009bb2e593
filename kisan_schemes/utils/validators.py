"""
Request validation helpers
"""
from typing import Any, List
from ..config import settings

_SCALAR_TYPES = (str, int, float, bool)


def validate_profile_name(profile_name: str, max_length: int = None) -> bool:
    """
    Validate a farmer scheme profile name

    Args:
        profile_name: Name to validate
        max_length: Maximum allowed length after trimming (defaults to settings)

    Returns:
        True if valid, False otherwise
    """
    if max_length is None:
        max_length = settings.profile_name_max_length

    if not profile_name or not profile_name.strip():
        return False

    return len(profile_name.strip()) <= max_length


def validate_farmer_input(farmer_input: Any) -> List[str]:
    """
    Validate questionnaire answers and return list of validation errors

    Args:
        farmer_input: Field name -> answer mapping from the request body

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not isinstance(farmer_input, dict):
        return ["Farmer input must be an object of field -> answer"]

    for key, value in farmer_input.items():
        if not str(key).strip():
            errors.append("Field names cannot be blank")
        if value is not None and not isinstance(value, _SCALAR_TYPES):
            errors.append(f"Answer for '{key}' must be text, a number or a boolean")

    return errors
