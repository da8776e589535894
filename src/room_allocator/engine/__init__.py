"""Hotel room allocation engine.

Phases run over a single AllocationSession:
- sort_clients_by_priority: deterministic processing order
- RoomFinder: first-fit search with per-run availability
- GroupAssigner, VipAssigner, SoloAssigner: placement phases
- OccupancyOptimizer: one top-up pass over under-used rooms
- SummaryReporter: output contract

Usage:
    from room_allocator.engine import RoomAllocator

    allocator = RoomAllocator(hotels, {"optimizeOccupancy": True})
    result = allocator.allocate(clients)
"""

from .allocator import RoomAllocator, allocate_rooms, create_allocator
from .config import AllocationRules, load_rules
from .groups import GroupAssigner
from .individuals import SoloAssigner, VipAssigner
from .optimizer import OccupancyOptimizer
from .ordering import sort_clients_by_priority
from .rooms import RoomFinder, inventory_warnings
from .session import AllocationSession
from .summary import SummaryReporter

__all__ = [
    # Orchestration
    "RoomAllocator",
    "allocate_rooms",
    "create_allocator",
    # Configuration
    "AllocationRules",
    "load_rules",
    # Phases
    "AllocationSession",
    "GroupAssigner",
    "OccupancyOptimizer",
    "RoomFinder",
    "SoloAssigner",
    "SummaryReporter",
    "VipAssigner",
    "inventory_warnings",
    "sort_clients_by_priority",
]
