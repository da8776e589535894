"""Validation logic for client rosters and hotel inventories."""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .constants import COUPLE_RELATION
from .exceptions import DuplicateIdError
from .models import Client, Gender, HotelInventory
from .normalization import is_blank, normalize_client_type, normalize_gender


@dataclass
class ValidationReport:
    """Outcome of validating a roster against an inventory."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def validate_gender(value: Any) -> tuple[bool, str | None]:
    """Validate a gender label.

    Args:
        value: Raw gender value

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        normalize_gender(value)
    except ValueError as exc:
        return False, str(exc)
    return True, None


def validate_client_type(value: Any) -> tuple[bool, str | None]:
    """Validate a client type label (blank means Solo)."""
    try:
        normalize_client_type(value)
    except ValueError as exc:
        return False, str(exc)
    return True, None


def validate_count(value: Any, field_name: str, allow_zero: bool = True) -> tuple[bool, str | None]:
    """Validate a non-negative whole number such as capacity or quantity.

    Args:
        value: Value to validate
        field_name: Name of the field for error message
        allow_zero: Whether 0 is acceptable

    Returns:
        Tuple of (is_valid, error_message)
    """
    if is_blank(value):
        return False, f"{field_name} is empty"

    try:
        number = float(value)
    except (ValueError, TypeError):
        return False, f"Invalid {field_name} value: '{value}'"

    if not math.isfinite(number):
        return False, f"Invalid {field_name} value: '{value}'"
    if number != int(number):
        return False, f"{field_name} must be a whole number: {value}"
    if number < 0:
        return False, f"Negative {field_name}: {int(number)}"
    if number == 0 and not allow_zero:
        return False, f"{field_name} must be positive"

    return True, None


def validate_client_record(record: dict[str, Any]) -> tuple[bool, str | None]:
    """Validate one raw client record before it becomes a Client.

    Args:
        record: Record with snake_case keys

    Returns:
        Tuple of (is_valid, error_message)
    """
    if is_blank(record.get("id")):
        return False, "Client id is empty"

    for check in (
        validate_gender(record.get("gender")),
        validate_client_type(record.get("client_type")),
    ):
        if not check[0]:
            return check

    if not is_blank(record.get("group_size")):
        valid, error = validate_count(record["group_size"], "group_size")
        if not valid:
            return valid, error

    return True, None


def check_unique_ids(ids: list[str], kind: str) -> None:
    """Raise if any identifier appears more than once.

    Args:
        ids: Identifiers in input order
        kind: Entity name for the error message ("client", "hotel")

    Raises:
        DuplicateIdError: Listing each repeated id once, in first-seen order
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    if duplicates:
        raise DuplicateIdError(kind, duplicates)


def validate_roster(clients: list[Client], hotels: list[HotelInventory]) -> ValidationReport:
    """Check a roster and inventory for problems the engine cannot fix.

    Errors make the partition of clients ambiguous (duplicate ids). Warnings
    flag input the engine accepts but will likely leave clients unassigned.

    Args:
        clients: Parsed clients
        hotels: Parsed hotel inventories

    Returns:
        ValidationReport
    """
    report = ValidationReport()

    duplicate_clients = sorted(i for i, n in Counter(c.id for c in clients).items() if n > 1)
    if duplicate_clients:
        report.errors.append(f"Duplicate client ids: {', '.join(duplicate_clients)}")

    duplicate_hotels = sorted(i for i, n in Counter(h.id for h in hotels).items() if n > 1)
    if duplicate_hotels:
        report.errors.append(f"Duplicate hotel ids: {', '.join(duplicate_hotels)}")

    for hotel in hotels:
        types = Counter(rt.type for rt in hotel.room_types)
        repeated = sorted(t for t, n in types.items() if n > 1)
        if repeated:
            report.errors.append(
                f"Hotel '{hotel.name}' lists room types more than once: {', '.join(repeated)}"
            )
        if not hotel.room_types:
            report.warnings.append(f"Hotel '{hotel.name}' has no room types")
        for spec in hotel.room_types:
            if not spec.is_usable:
                report.warnings.append(
                    f"Room type '{spec.type}' in hotel '{hotel.name}' provides no beds"
                )

    report.warnings.extend(_group_warnings(clients))

    others = [c.id for c in clients if c.gender == Gender.OTHER]
    if others:
        report.warnings.append(
            f"{len(others)} client(s) of gender Other need manual review: {', '.join(others)}"
        )

    beds = sum(h.total_beds for h in hotels)
    if len(clients) > beds:
        report.warnings.append(
            f"Roster has {len(clients)} client(s) but inventory offers {beds} bed(s)"
        )

    return report


def _group_warnings(clients: list[Client]) -> list[str]:
    members: dict[str, list[Client]] = {}
    for client in clients:
        if client.group_name:
            members.setdefault(client.group_name, []).append(client)

    warnings = []
    for name, group in members.items():
        sizes = {c.group_size for c in group}
        if len(sizes) > 1:
            warnings.append(f"Group '{name}' members disagree on group size: {sorted(sizes)}")
        elif group[0].group_size and group[0].group_size != len(group):
            warnings.append(
                f"Group '{name}' declares {group[0].group_size} member(s) "
                f"but the roster lists {len(group)}"
            )

        relations = {(c.group_relation or "").lower() for c in group}
        if COUPLE_RELATION.lower() in relations and len(group) != 2:
            warnings.append(f"Group '{name}' is marked as a couple but has {len(group)} member(s)")
    return warnings
