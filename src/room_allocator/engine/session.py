"""Working state of a single allocation run."""

from collections import defaultdict
from dataclasses import dataclass, field

from ..models import Client, HotelInventory, RoomAssignment, UnassignedCode
from .config import AllocationRules


@dataclass
class FailureRecord:
    """Last known reason a client could not be placed."""

    code: UnassignedCode
    details: str


@dataclass
class AllocationSession:
    """Mutable state owned by exactly one allocation run.

    Phases receive the session by reference and are the only writers. Clients
    move from ``unassigned`` to an assignment's occupants through ``commit``
    or ``place_in``, which keeps every client in exactly one of the two.
    """

    hotels: list[HotelInventory]
    rules: AllocationRules
    unassigned: list[Client] = field(default_factory=list)
    assignments: list[RoomAssignment] = field(default_factory=list)
    # (hotel_id, room_type) -> rooms consumed in this run
    consumed: dict[tuple[str, str], int] = field(default_factory=lambda: defaultdict(int))
    failures: dict[str, FailureRecord] = field(default_factory=dict)

    @classmethod
    def start(
        cls,
        clients: list[Client],
        hotels: list[HotelInventory],
        rules: AllocationRules,
    ) -> "AllocationSession":
        """Create a session with every client in the unassigned pool."""
        return cls(hotels=list(hotels), rules=rules, unassigned=list(clients))

    def consume(self, hotel_id: str, room_type: str) -> int:
        """Take one room of a type and return its 1-based sequence number."""
        key = (hotel_id, room_type)
        self.consumed[key] += 1
        return self.consumed[key]

    def rooms_consumed(self, hotel_id: str, room_type: str) -> int:
        return self.consumed.get((hotel_id, room_type), 0)

    def commit(self, assignment: RoomAssignment) -> None:
        """Record a new assignment and drop its occupants from the pool."""
        self.assignments.append(assignment)
        self._remove_ids(set(assignment.client_ids))

    def place_in(self, assignment: RoomAssignment, clients: list[Client]) -> None:
        """Add pool clients to an existing assignment."""
        assignment.add_clients(clients)
        self._remove_ids({c.id for c in clients})

    def record_failure(
        self, clients: list[Client], code: UnassignedCode, details: str
    ) -> None:
        """Remember why clients are still unassigned (latest attempt wins)."""
        for client in clients:
            self.failures[client.id] = FailureRecord(code=code, details=details)

    def pool_of_type(self, *client_types) -> list[Client]:
        """Unassigned clients of the given types, in pool order."""
        return [c for c in self.unassigned if c.client_type in client_types]

    def _remove_ids(self, client_ids: set[str]) -> None:
        self.unassigned = [c for c in self.unassigned if c.id not in client_ids]
