"""Room Allocator - assigns event attendees to hotel rooms.

This package places clients (VIPs, influencers, staff, groups and solo
attendees) into hotel room inventories while respecting room capacity,
gender separation, VIP and couple exceptions, and group cohesion. It returns
a reproducible allocation together with per-room and per-client diagnostics.

Example usage:
    from room_allocator import allocate_rooms, load_clients, load_hotels

    clients = load_clients("clients.csv")
    hotels = load_hotels("hotels.csv")
    result = allocate_rooms(clients, hotels)

    print(f"Assigned: {result.total_assigned}")
    print(f"Unassigned: {result.total_unassigned}")

    for room in result.assignments:
        print(f"{room.room_id} | {room.occupant_count}/{room.capacity}")

    # Export to JSON
    from room_allocator.exporters import JSONExporter
    JSONExporter().export(result, "allocation.json")
"""

from .engine import AllocationRules, RoomAllocator, allocate_rooms, create_allocator, load_rules
from .exceptions import (
    AllocationInputError,
    DuplicateIdError,
    InvalidClientError,
    InvalidHotelError,
    MalformedFileError,
    MissingColumnsError,
    UnsupportedFormatError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .loaders import load_clients, load_hotels
from .models import (
    AllocationResult,
    AllocationStatistics,
    Client,
    ClientType,
    Gender,
    HotelInventory,
    Occupant,
    RoomAssignment,
    RoomTypeSpec,
    UnassignedClient,
    UnassignedCode,
)
from .validators import ValidationReport, validate_roster

__version__ = "0.1.0"

__all__ = [
    # Engine
    "RoomAllocator",
    "allocate_rooms",
    "create_allocator",
    "AllocationRules",
    "load_rules",
    # Models
    "Client",
    "ClientType",
    "Gender",
    "HotelInventory",
    "RoomTypeSpec",
    "Occupant",
    "RoomAssignment",
    "UnassignedClient",
    "UnassignedCode",
    "AllocationStatistics",
    "AllocationResult",
    # Input
    "load_clients",
    "load_hotels",
    "validate_roster",
    "ValidationReport",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "AllocationInputError",
    "InvalidClientError",
    "InvalidHotelError",
    "DuplicateIdError",
    "MalformedFileError",
    "MissingColumnsError",
    "UnsupportedFormatError",
]
