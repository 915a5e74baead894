"""Formatting of authority validation details for display."""

from collections.abc import Iterable

from src.features.configuration.constants import LOCATION_SEPARATOR
from src.features.configuration.models import ValidationDetail


def format_validation_detail(detail: ValidationDetail) -> str:
    """Render one detail as ``"<message>: <loc>→<loc>"``.

    Args:
        detail: Validation detail from the authority.

    Returns:
        Single display line.
    """
    return f"{detail.message}: {LOCATION_SEPARATOR.join(detail.location)}"


def format_validation_details(details: Iterable[ValidationDetail]) -> str:
    """Render details as a multi-line message, one line per detail."""
    return "\n".join(format_validation_detail(detail) for detail in details)
