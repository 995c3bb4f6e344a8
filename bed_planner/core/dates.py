"""
Date input helpers

Clients may send admission and discharge dates as ISO (2025-01-15) or in the
day-first forms used on ward paperwork (15/01/2025, 15-1-2025).
"""

from datetime import date, datetime
from typing import Optional, Union

from bed_planner.core.exceptions import InvalidInputError


ISO_FORMAT = "%Y-%m-%d"
DAY_FIRST_SLASH = "%d/%m/%Y"
DAY_FIRST_DASH = "%d-%m-%Y"


def parse_flexible_date(value: Optional[str]) -> date:
    """Parse a date trying ISO first, then the day-first formats"""
    if value is None or not value.strip():
        raise InvalidInputError("Date cannot be blank")

    trimmed = value.strip()
    candidates = [ISO_FORMAT]
    if "/" in trimmed:
        candidates.append(DAY_FIRST_SLASH)
    elif "-" in trimmed:
        candidates.append(DAY_FIRST_DASH)

    for fmt in candidates:
        try:
            return datetime.strptime(trimmed, fmt).date()
        except ValueError:
            continue

    raise InvalidInputError(
        f"Invalid date format: {value}",
        details={"accepted_formats": ["yyyy-mm-dd", "d/m/yyyy", "d-m-yyyy"]}
    )


def coerce_date(value: Union[str, date, None]) -> Optional[date]:
    """Pydantic before-validator hook: pass dates through, parse strings"""
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_flexible_date(value)
    return value


def validate_date_field(value: Union[str, date, None]) -> Optional[date]:
    """Request schema hook; pydantic only reports ValueError as a field error"""
    try:
        return coerce_date(value)
    except InvalidInputError as e:
        raise ValueError(e.message) from e
