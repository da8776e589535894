"""Room search over hotel inventories."""

import logging

from ..models import (
    Client,
    HotelInventory,
    Occupant,
    RoomAssignment,
    UnassignedCode,
    percent_of,
)
from .session import AllocationSession

logger = logging.getLogger(__name__)


class RoomFinder:
    """First-fit room search with per-run availability tracking.

    Hotels are scanned in input order and room types in their listed order.
    The first type that is large enough and still has rooms left wins. Room
    availability is the inventory quantity minus the rooms of that type
    already handed out in the session.
    """

    def __init__(self, session: AllocationSession) -> None:
        self.session = session

    def available(self, hotel: HotelInventory, room_type: str, quantity: int) -> int:
        """Rooms of a type still free in this run."""
        return max(0, quantity - self.session.rooms_consumed(hotel.id, room_type))

    def find_room(
        self, members: list[Client], allow_mixed: bool = False
    ) -> RoomAssignment | None:
        """Find and reserve one room for all members.

        Args:
            members: Clients that must share the room
            allow_mixed: Whether the room may hold several genders

        Returns:
            A new RoomAssignment (not yet committed to the session), or None
            if no room type fits
        """
        needed = len(members)
        if needed == 0:
            return None

        for hotel in self.session.hotels:
            for spec in hotel.room_types:
                if spec.capacity < needed:
                    continue
                if self.available(hotel, spec.type, spec.quantity) <= 0:
                    continue

                number = self.session.consume(hotel.id, spec.type)
                return RoomAssignment(
                    hotel_id=hotel.id,
                    hotel_name=hotel.name,
                    room_id=f"{hotel.id}_{spec.type}_{number}",
                    room_type=spec.type,
                    capacity=spec.capacity,
                    occupants=[Occupant.from_client(m) for m in members],
                    is_mixed=allow_mixed and len({m.gender for m in members}) > 1,
                    utilization_rate=percent_of(needed, spec.capacity),
                )

        return None

    def diagnose(self, size: int) -> UnassignedCode:
        """Classify why no room was found for a batch of a given size.

        Args:
            size: Number of clients that needed one room

        Returns:
            AVAILABILITY_EXHAUSTED if a large enough type exists but is used
            up, NO_FITTING_ROOM_TYPE otherwise
        """
        for hotel in self.session.hotels:
            for spec in hotel.room_types:
                if spec.capacity >= size and spec.quantity > 0:
                    return UnassignedCode.AVAILABILITY_EXHAUSTED
        return UnassignedCode.NO_FITTING_ROOM_TYPE

    def assign(self, members: list[Client], allow_mixed: bool = False, label: str = "") -> bool:
        """Find a room for members and commit it, or record the failure.

        Args:
            members: Clients that must share the room
            allow_mixed: Whether the room may hold several genders
            label: Description used in logs and failure details

        Returns:
            True if the members were placed
        """
        assignment = self.find_room(members, allow_mixed)
        description = label or ", ".join(m.id for m in members)
        if assignment is None:
            code = self.diagnose(len(members))
            if code == UnassignedCode.AVAILABILITY_EXHAUSTED:
                details = f"All rooms for {len(members)} client(s) are taken ({description})"
            else:
                details = f"No room type holds {len(members)} client(s) ({description})"
            self.session.record_failure(members, code, details)
            logger.debug(f"No room for {description}: {code.value}")
            return False

        self.session.commit(assignment)
        logger.debug(
            f"Placed {description} in {assignment.room_id} "
            f"({assignment.occupant_count}/{assignment.capacity})"
        )
        return True


def inventory_warnings(hotels: list[HotelInventory]) -> list[str]:
    """Describe inventory entries that contribute no capacity.

    Args:
        hotels: Hotel inventories supplied to the run

    Returns:
        One warning per hotel without room types and per unusable room type
    """
    warnings = []
    for hotel in hotels:
        if not hotel.room_types:
            warnings.append(f"hotel '{hotel.name}' has no room types")
            continue
        for spec in hotel.room_types:
            if spec.quantity <= 0:
                warnings.append(
                    f"room type '{spec.type}' in hotel '{hotel.name}' has zero quantity"
                )
            elif spec.capacity <= 0:
                warnings.append(
                    f"room type '{spec.type}' in hotel '{hotel.name}' has zero capacity"
                )
    for warning in warnings:
        logger.warning(warning)
    return warnings
