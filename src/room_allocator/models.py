"""Data models for hotel room allocation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import InvalidHotelError
from .normalization import (
    normalize_client_type,
    normalize_gender,
    normalize_optional_text,
    pick,
)


class Gender(str, Enum):
    """Client gender as recorded on the roster."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ClientType(str, Enum):
    """Category of attendee, used for processing priority."""

    VIP = "VIP"
    INFLUENCER = "Influencer"
    STAFF = "Staff"
    GROUP = "Group"
    SOLO = "Solo"
    STANDARD = "Standard"  # Used by the surrounding system, never prioritized


class UnassignedCode(str, Enum):
    """Structured cause for a client left without a room."""

    NO_FITTING_ROOM_TYPE = "no_fitting_room_type"
    AVAILABILITY_EXHAUSTED = "availability_exhausted"
    MIXING_NOT_ALLOWED = "mixing_not_allowed"
    MANUAL_ASSIGNMENT_REQUIRED = "manual_assignment_required"
    NO_MATCHING_PHASE = "no_matching_phase"


def percent_of(part: int, whole: int) -> int:
    """Integer percentage rounded half up.

    Args:
        part: Numerator
        whole: Denominator

    Returns:
        round(100 * part / whole) with .5 rounding up, or 0 when whole is 0
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


@dataclass(frozen=True)
class Client:
    """An event attendee that needs a room."""

    id: str
    first_name: str
    last_name: str
    gender: Gender
    client_type: ClientType
    group_name: str | None = None
    group_size: int = 0
    group_relation: str | None = None

    @property
    def name(self) -> str:
        """Full display name."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_vip(self) -> bool:
        return self.client_type == ClientType.VIP

    @property
    def has_group(self) -> bool:
        return bool(self.group_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Client":
        """Create a Client from a roster record.

        Accepts snake_case and camelCase keys, as well as ``_id`` for the
        identifier and ``name`` when first/last names are not split.

        Args:
            data: Raw client record

        Returns:
            Client instance

        Raises:
            ValueError: If gender or client type cannot be recognized
        """
        first_name = normalize_optional_text(pick(data, "first_name", "firstName"))
        last_name = normalize_optional_text(pick(data, "last_name", "lastName"))
        if first_name is None and last_name is None:
            first_name = normalize_optional_text(data.get("name"))

        group_size = pick(data, "group_size", "groupSize")
        return cls(
            id=str(pick(data, "id", "_id", "client_id", "clientId")),
            first_name=first_name or "",
            last_name=last_name or "",
            gender=Gender(normalize_gender(data.get("gender"))),
            client_type=ClientType(
                normalize_client_type(pick(data, "client_type", "clientType"))
            ),
            group_name=normalize_optional_text(pick(data, "group_name", "groupName")),
            group_size=int(group_size) if group_size not in (None, "") else 0,
            group_relation=normalize_optional_text(
                pick(data, "group_relation", "groupRelation")
            ),
        )


@dataclass(frozen=True)
class RoomTypeSpec:
    """A room type offered by a hotel."""

    type: str
    capacity: int
    quantity: int

    @property
    def is_usable(self) -> bool:
        """Whether the type can ever hold a client."""
        return self.capacity > 0 and self.quantity > 0


@dataclass(frozen=True)
class HotelInventory:
    """A hotel and its ordered room type inventory."""

    id: str
    name: str
    room_types: tuple[RoomTypeSpec, ...] = ()

    @property
    def total_beds(self) -> int:
        return sum(rt.capacity * rt.quantity for rt in self.room_types if rt.is_usable)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelInventory":
        """Create a HotelInventory from a record with nested room types."""
        hotel_id = str(pick(data, "id", "_id", "hotel_id", "hotelId"))
        room_types = []
        for rt in pick(data, "room_types", "roomTypes") or []:
            label = normalize_optional_text(pick(rt, "type", "room_type", "roomType"))
            if not label:
                raise InvalidHotelError(hotel_id, "room type label is empty")
            room_types.append(
                RoomTypeSpec(
                    type=label,
                    capacity=int(pick(rt, "capacity") or 0),
                    quantity=int(pick(rt, "quantity") or 0),
                )
            )
        return cls(
            id=hotel_id,
            name=str(data.get("name") or hotel_id),
            room_types=tuple(room_types),
        )


@dataclass(frozen=True)
class Occupant:
    """Reference to a client placed in a room."""

    client_id: str
    name: str
    gender: Gender
    client_type: ClientType
    group_name: str | None = None
    group_relation: str | None = None

    @property
    def is_vip(self) -> bool:
        return self.client_type == ClientType.VIP

    @classmethod
    def from_client(cls, client: Client) -> "Occupant":
        return cls(
            client_id=client.id,
            name=client.name,
            gender=client.gender,
            client_type=client.client_type,
            group_name=client.group_name,
            group_relation=client.group_relation,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert occupant to dictionary."""
        return {
            "clientId": self.client_id,
            "name": self.name,
            "gender": self.gender.value,
            "clientType": self.client_type.value,
            "groupName": self.group_name,
        }


@dataclass
class RoomAssignment:
    """A room allocated to one or more clients."""

    hotel_id: str
    hotel_name: str
    room_id: str
    room_type: str
    capacity: int
    occupants: list[Occupant] = field(default_factory=list)
    is_mixed: bool = False
    utilization_rate: int = 0

    @property
    def occupant_count(self) -> int:
        return len(self.occupants)

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - len(self.occupants))

    @property
    def genders(self) -> set[Gender]:
        """Distinct genders among occupants."""
        return {o.gender for o in self.occupants}

    @property
    def group_names(self) -> set[str]:
        return {o.group_name for o in self.occupants if o.group_name}

    @property
    def client_ids(self) -> list[str]:
        return [o.client_id for o in self.occupants]

    def add_clients(self, clients: list[Client]) -> None:
        """Append clients and refresh utilization and mixing flag.

        Args:
            clients: Clients to place in this room, in order
        """
        self.occupants.extend(Occupant.from_client(c) for c in clients)
        self.utilization_rate = percent_of(len(self.occupants), self.capacity)
        if len(self.genders) > 1:
            self.is_mixed = True

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "hotelId": self.hotel_id,
            "hotelName": self.hotel_name,
            "roomId": self.room_id,
            "roomType": self.room_type,
            "capacity": self.capacity,
            "occupants": [o.to_dict() for o in self.occupants],
            "isMixed": self.is_mixed,
            "utilizationRate": self.utilization_rate,
        }


@dataclass
class UnassignedClient:
    """A client the engine could not place."""

    id: str
    name: str
    reason: str
    code: UnassignedCode
    details: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "reason": self.reason,
            "code": self.code.value,
            "details": self.details,
        }


@dataclass
class AllocationStatistics:
    """Occupant counts over all produced assignments."""

    by_type: dict[str, int] = field(default_factory=dict)
    by_gender: dict[str, int] = field(default_factory=dict)
    by_hotel: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "byType": self.by_type,
            "byGender": self.by_gender,
            "byHotel": self.by_hotel,
        }


@dataclass
class AllocationResult:
    """Result of one allocation run."""

    assignments: list[RoomAssignment] = field(default_factory=list)
    unassigned_clients: list[UnassignedClient] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    statistics: AllocationStatistics = field(default_factory=AllocationStatistics)
    occupancy_rate: int = 0
    success: bool = True

    @property
    def total_assigned(self) -> int:
        """Total number of placed clients."""
        return sum(a.occupant_count for a in self.assignments)

    @property
    def total_unassigned(self) -> int:
        return len(self.unassigned_clients)

    @property
    def rooms_used(self) -> int:
        return len(self.assignments)

    @property
    def mixed_rooms(self) -> int:
        return sum(1 for a in self.assignments if a.is_mixed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "totalAssigned": self.total_assigned,
            "totalUnassigned": self.total_unassigned,
            "roomsUsed": self.rooms_used,
            "mixedRooms": self.mixed_rooms,
            "occupancyRate": self.occupancy_rate,
            "assignments": [a.to_dict() for a in self.assignments],
            "unassignedClients": [u.to_dict() for u in self.unassigned_clients],
            "warnings": self.warnings,
            "statistics": self.statistics.to_dict(),
        }
