"""
Input cleaning shared by the services.
"""

from typing import Optional

from supplier_portal.utils.exceptions import ValidationError


def clean_required(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """
    Strip surrounding whitespace from a required text field.

    Raises:
        ValidationError: If nothing is left after stripping
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{label or field.replace('_', ' ').capitalize()} is required", field=field)
    return cleaned
