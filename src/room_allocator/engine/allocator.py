"""Allocation engine: runs every phase over one session."""

import logging
from pathlib import Path
from typing import Any

from ..models import AllocationResult, Client, HotelInventory
from ..normalization import to_snake_case
from ..validators import check_unique_ids
from .config import AllocationRules, load_rules, resolve_rules
from .groups import GroupAssigner
from .individuals import SoloAssigner, VipAssigner
from .optimizer import OccupancyOptimizer
from .ordering import sort_clients_by_priority
from .rooms import RoomFinder, inventory_warnings
from .session import AllocationSession
from .summary import SummaryReporter

logger = logging.getLogger(__name__)


class RoomAllocator:
    """Assigns clients to hotel rooms.

    Phases, in order:
    1. Sort clients by priority (type, group size, grouping, gender)
    2. Groups, kept together where capacity and mixing rules allow
    3. Remaining VIPs, one room each
    4. Remaining Solo clients, batched by gender
    5. Occupancy top-up of rooms under 75% (if enabled)
    6. Summary

    The engine is a pure function of its inputs. Room availability is counted
    only within the run, so two runs against the same inventory must not be
    treated as sharing capacity.
    """

    def __init__(
        self,
        hotels: list[HotelInventory | dict[str, Any]],
        rules: AllocationRules | dict[str, Any] | None = None,
    ) -> None:
        """Initialize the allocator.

        Args:
            hotels: Hotel inventories in search order
            rules: Allocation rules, as a dataclass or a camelCase/snake_case dict
        """
        self.hotels = [_as_hotel(h) for h in hotels]
        self.rules = resolve_rules(rules)

    def allocate(self, clients: list[Client | dict[str, Any]]) -> AllocationResult:
        """Allocate rooms for a roster.

        Args:
            clients: Client records

        Returns:
            AllocationResult with assignments, unassigned clients and statistics

        Raises:
            DuplicateIdError: Two clients share an id
        """
        roster = [_as_client(c) for c in clients]
        check_unique_ids([c.id for c in roster], "client")
        logger.info(
            f"Allocating {len(roster)} client(s) across {len(self.hotels)} hotel(s)"
        )
        warnings = inventory_warnings(self.hotels)

        session = AllocationSession.start(
            sort_clients_by_priority(roster), self.hotels, self.rules
        )
        finder = RoomFinder(session)

        GroupAssigner(session, finder).run()
        VipAssigner(session, finder).run()
        SoloAssigner(session, finder).run()

        if self.rules.optimize_occupancy:
            OccupancyOptimizer(session).run()

        return SummaryReporter(session, warnings).build()


def allocate_rooms(
    clients: list[Client | dict[str, Any]],
    hotels: list[HotelInventory | dict[str, Any]],
    rules: AllocationRules | dict[str, Any] | None = None,
) -> AllocationResult:
    """Run the allocation engine once.

    Args:
        clients: Client records
        hotels: Hotel inventories in search order
        rules: Optional allocation rules

    Returns:
        AllocationResult
    """
    return RoomAllocator(hotels, rules).allocate(clients)


def create_allocator(
    hotels: list[HotelInventory | dict[str, Any]],
    rules_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> RoomAllocator:
    """Factory function to create a RoomAllocator.

    Args:
        hotels: Hotel inventories in search order
        rules_path: Optional path to a JSON rules file
        overrides: Rule values that take precedence over the file

    Returns:
        Configured RoomAllocator instance
    """
    rules = load_rules(rules_path) if rules_path else AllocationRules()
    if overrides:
        merged = rules.to_dict()
        merged.update(
            {to_snake_case(k): v for k, v in overrides.items() if v is not None}
        )
        rules = AllocationRules.from_dict(merged)
    return RoomAllocator(hotels, rules)


def _as_client(value: Client | dict[str, Any]) -> Client:
    return value if isinstance(value, Client) else Client.from_dict(value)


def _as_hotel(value: HotelInventory | dict[str, Any]) -> HotelInventory:
    return value if isinstance(value, HotelInventory) else HotelInventory.from_dict(value)
