"""Occupancy top-up pass over produced room assignments."""

import logging

from ..constants import UNDERUTILIZED_THRESHOLD
from ..models import Client, Gender, RoomAssignment
from .session import AllocationSession

logger = logging.getLogger(__name__)


class OccupancyOptimizer:
    """Fills free beds in under-used rooms with compatible leftover clients.

    Runs once over the assignments in creation order; it is not repeated
    until nothing else fits. A candidate joins a room when:
    - its gender is already present in the room, or it is a VIP joining a
      room of VIPs (which may make the room mixed), and
    - if it belongs to a group, a member of that group is already inside.
    """

    def __init__(self, session: AllocationSession) -> None:
        self.session = session
        self.rules = session.rules

    def run(self) -> int:
        """Top up under-used rooms.

        Returns:
            Number of clients placed by this pass
        """
        placed = 0
        for room in self.session.assignments:
            if room.utilization_rate >= UNDERUTILIZED_THRESHOLD:
                continue
            if room.free_capacity <= 0:
                continue

            candidates = self.find_compatible_clients(room, room.free_capacity)
            if not candidates:
                continue

            self.session.place_in(room, candidates)
            placed += len(candidates)
            logger.debug(
                f"Topped up {room.room_id} with {len(candidates)} client(s), "
                f"now {room.utilization_rate}%"
            )

        logger.info(f"Occupancy pass placed {placed} client(s)")
        return placed

    def find_compatible_clients(self, room: RoomAssignment, limit: int) -> list[Client]:
        """Select up to ``limit`` pool clients that may join a room.

        Each accepted candidate is taken into account when checking the next
        one, so a room never drifts out of the mixing rule.

        Args:
            room: Room to top up
            limit: Free beds in the room

        Returns:
            Candidates in pool order
        """
        genders: set[Gender] = set(room.genders)
        everyone_vip = all(o.is_vip for o in room.occupants)
        group_names = room.group_names

        selected: list[Client] = []
        for client in self.session.unassigned:
            if len(selected) >= limit:
                break
            if client.has_group and self.rules.keep_groups_together:
                if client.group_name not in group_names:
                    continue
            if not self._gender_compatible(client, genders, everyone_vip):
                continue

            selected.append(client)
            genders.add(client.gender)
            everyone_vip = everyone_vip and client.is_vip

        return selected

    def _gender_compatible(
        self, client: Client, genders: set[Gender], everyone_vip: bool
    ) -> bool:
        if self.rules.allow_mixed_rooms:
            return True
        vip_join = client.is_vip and everyone_vip and self.rules.vip_can_be_mixed
        if len(genders) > 1:
            return vip_join
        return client.gender in genders or vip_join
