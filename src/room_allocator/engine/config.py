"""Allocation rules configuration."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from ..constants import DEFAULT_RULES
from ..normalization import to_snake_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllocationRules:
    """Switches that shape how the engine places clients.

    Attributes:
        allow_mixed_rooms: Let any mixed group share a room and let the
            optimizer add clients of any gender. Overrides the mixing rule.
        vip_can_be_mixed: Let all-VIP groups and rooms hold several genders.
        keep_groups_together: Try one room per group before splitting, and
            only top up rooms with members of groups already inside.
        optimize_occupancy: Run the occupancy top-up pass.
    """

    allow_mixed_rooms: bool = DEFAULT_RULES["allow_mixed_rooms"]
    vip_can_be_mixed: bool = DEFAULT_RULES["vip_can_be_mixed"]
    keep_groups_together: bool = DEFAULT_RULES["keep_groups_together"]
    optimize_occupancy: bool = DEFAULT_RULES["optimize_occupancy"]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AllocationRules":
        """Build rules from a camelCase or snake_case mapping.

        Unknown keys are ignored.

        Args:
            data: Mapping such as {"allowMixedRooms": true}

        Returns:
            AllocationRules with defaults for missing keys
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values: dict[str, bool] = {}
        for key, value in data.items():
            name = to_snake_case(key)
            if name not in known:
                logger.warning(f"Ignoring unknown allocation rule '{key}'")
                continue
            values[name] = _to_bool(value)
        return cls(**values)

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def resolve_rules(rules: "AllocationRules | dict[str, Any] | None") -> AllocationRules:
    """Accept rules as a dataclass, a mapping, or None."""
    if isinstance(rules, AllocationRules):
        return rules
    return AllocationRules.from_dict(rules)


def load_rules(path: Path | str) -> AllocationRules:
    """Load allocation rules from a JSON file.

    Args:
        path: Path to a JSON object of rule switches

    Returns:
        AllocationRules
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Rules file {path} must contain a JSON object")
    # Allow {"rules": {...}} wrappers
    if isinstance(data.get("rules"), dict):
        data = data["rules"]
    return AllocationRules.from_dict(data)
