"""Label normalization for roster and inventory values."""

import re
from typing import Any

import pandas as pd

# Accepted spellings for each gender, lower-cased
GENDER_ALIASES = {
    "male": "Male",
    "m": "Male",
    "man": "Male",
    "homme": "Male",  # Legacy French exports
    "h": "Male",
    "female": "Female",
    "f": "Female",
    "woman": "Female",
    "femme": "Female",
    "other": "Other",
    "o": "Other",
    "autre": "Other",
}

# Accepted spellings for each client type, lower-cased
CLIENT_TYPE_ALIASES = {
    "vip": "VIP",
    "influencer": "Influencer",
    "influenceur": "Influencer",
    "staff": "Staff",
    "group": "Group",
    "groupe": "Group",
    "solo": "Solo",
    "standard": "Standard",
}


def is_blank(value: Any) -> bool:
    """Check for None, NaN or whitespace-only values."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def pick(data: dict[str, Any], *keys: str) -> Any:
    """Return the first non-blank value among candidate keys.

    Args:
        data: Record to read from
        *keys: Candidate keys in order of preference

    Returns:
        The first non-blank value, or None
    """
    for key in keys:
        value = data.get(key)
        if not is_blank(value):
            return value
    return None


def normalize_optional_text(value: Any) -> str | None:
    """Collapse whitespace and map blanks to None."""
    if is_blank(value):
        return None
    return " ".join(str(value).split())


def normalize_gender(value: Any) -> str:
    """Normalize a gender label.

    Args:
        value: Raw gender value (e.g. "male", "F", "Homme")

    Returns:
        One of "Male", "Female", "Other"

    Raises:
        ValueError: If the label is not recognized
    """
    if is_blank(value):
        raise ValueError("Gender is empty")
    key = str(value).strip().lower()
    if key not in GENDER_ALIASES:
        raise ValueError(f"Unknown gender: '{value}'")
    return GENDER_ALIASES[key]


def normalize_client_type(value: Any) -> str:
    """Normalize a client type label.

    Blank values default to "Solo".

    Raises:
        ValueError: If the label is not recognized
    """
    if is_blank(value):
        return "Solo"
    key = re.sub(r"\s+", "", str(value)).lower()
    if key not in CLIENT_TYPE_ALIASES:
        raise ValueError(f"Unknown client type: '{value}'")
    return CLIENT_TYPE_ALIASES[key]


def to_snake_case(name: str) -> str:
    """Convert a camelCase or spaced column header to snake_case."""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", str(name).strip())
    name = re.sub(r"[\s\-]+", "_", name)
    return name.lower()
