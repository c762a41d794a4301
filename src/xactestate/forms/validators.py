"""
Form Field Validators

Small building blocks shared by the public forms and the listing wizard.
Every failure raises ValidationError carrying the offending field name.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from xactestate.exceptions import ValidationError
from xactestate.utils.formatting import parse_amount
from xactestate.utils.sanitize import sanitize_input

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_blank(value: Any) -> bool:
    """True for None, empty or whitespace-only strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def missing_fields(data: Mapping[str, Any], fields: Iterable[str]) -> List[str]:
    """Names of the ``fields`` that are blank in ``data``."""
    return [name for name in fields if is_blank(data.get(name))]


def require_fields(data: Mapping[str, Any], fields: Sequence[str], message: str) -> None:
    """Raise ``message`` if any of ``fields`` is blank."""
    missing = missing_fields(data, fields)
    if missing:
        raise ValidationError(message, field=missing[0])


def validate_email(email: Any, field: str = "email") -> None:
    if not isinstance(email, str) or not EMAIL_RE.match(email.strip()):
        raise ValidationError("Invalid email format", field=field, value=email)


def check_max_lengths(
    data: Mapping[str, Any],
    limits: Mapping[str, int],
    message: str = "Field length exceeded",
) -> None:
    """Raise ``message`` for the first string field longer than its limit."""
    for name, limit in limits.items():
        value = data.get(name)
        if isinstance(value, str) and len(value) > limit:
            raise ValidationError(message, field=name, value=len(value))


def clean_text(value: Any) -> Optional[str]:
    """Sanitized text, or None when blank."""
    if is_blank(value):
        return None
    return sanitize_input(str(value)) or None


def optional_int(value: Any, field: str, minimum: Optional[int] = None) -> Optional[int]:
    """Coerce an optional whole number; blank becomes None."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid value for {field}", field=field, value=value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"Invalid value for {field}", field=field, value=value)
        number = int(value)
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            raise ValidationError(f"Invalid value for {field}", field=field, value=value) from None
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", field=field, value=number)
    return number


def optional_float(value: Any, field: str, minimum: Optional[float] = None) -> Optional[float]:
    """Coerce an optional decimal amount; blank becomes None."""
    if is_blank(value):
        return None
    number = parse_amount(value)
    if number is None:
        raise ValidationError(f"Invalid value for {field}", field=field, value=value)
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", field=field, value=number)
    return number


def optional_choice(value: Any, options: Iterable[str], field: str) -> Optional[str]:
    """Match ``value`` case-insensitively against ``options``.

    Returns:
        The canonical option, or None when blank.
    """
    if is_blank(value):
        return None
    wanted = str(value).strip().casefold()
    for option in options:
        if option.casefold() == wanted:
            return option
    raise ValidationError(f"Invalid {field}", field=field, value=value)


def string_list(value: Any, field: str, max_items: Optional[int] = None) -> List[str]:
    """Coerce a list of strings; blank becomes an empty list.

    Blank entries are dropped and the list is truncated to ``max_items``.
    """
    if is_blank(value):
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field} must be a list", field=field, value=value)
    items = [sanitize_input(str(item)) for item in value if not is_blank(item)]
    if max_items is not None:
        items = items[:max_items]
    return items


def enum_code(value: Any, choices: Mapping[str, str], field: str) -> Optional[str]:
    """Resolve a stored code (``"APARTMENT"``) or its label (``"Apartment"``).

    Returns:
        The code, or None when blank.
    """
    if is_blank(value):
        return None
    wanted = str(value).strip().casefold()
    for code, label in choices.items():
        if wanted in (code.casefold(), label.casefold()):
            return code
    raise ValidationError(f"Invalid {field}", field=field, value=value)
