"""Summary of an allocation run."""

import logging
from collections import defaultdict

from ..constants import (
    LARGE_GROUP_SIZE,
    LOW_OCCUPANCY_THRESHOLD,
    REASON_GROUP_TOO_LARGE,
    REASON_INSUFFICIENT_CAPACITY,
    REASON_MANUAL_ASSIGNMENT,
)
from ..models import (
    AllocationResult,
    AllocationStatistics,
    Client,
    Gender,
    RoomAssignment,
    UnassignedClient,
    UnassignedCode,
)
from .session import AllocationSession

logger = logging.getLogger(__name__)


def unassigned_reason(client: Client) -> str:
    """Heuristic, human-readable reason for an unplaced client.

    This guesses from the client record alone; ``UnassignedClient.code``
    carries the cause observed during the run.
    """
    if client.group_size > LARGE_GROUP_SIZE:
        return REASON_GROUP_TOO_LARGE
    if client.gender == Gender.OTHER:
        return REASON_MANUAL_ASSIGNMENT
    return REASON_INSUFFICIENT_CAPACITY


def average_occupancy(assignments: list[RoomAssignment]) -> int:
    """Mean utilization rate rounded half up, 0 when there are no rooms."""
    if not assignments:
        return 0
    total = sum(a.utilization_rate for a in assignments)
    count = len(assignments)
    return (2 * total + count) // (2 * count)


def compute_statistics(assignments: list[RoomAssignment]) -> AllocationStatistics:
    """Count placed occupants by client type, gender and hotel name."""
    by_type: dict[str, int] = defaultdict(int)
    by_gender: dict[str, int] = defaultdict(int)
    by_hotel: dict[str, int] = defaultdict(int)

    for assignment in assignments:
        for occupant in assignment.occupants:
            by_type[occupant.client_type.value] += 1
            by_gender[occupant.gender.value] += 1
            by_hotel[assignment.hotel_name] += 1

    return AllocationStatistics(
        by_type=dict(by_type),
        by_gender=dict(by_gender),
        by_hotel=dict(by_hotel),
    )


class SummaryReporter:
    """Turns a finished session into an AllocationResult."""

    def __init__(self, session: AllocationSession, inventory_warnings: list[str] | None = None):
        self.session = session
        self.inventory_warnings = inventory_warnings or []

    def build(self) -> AllocationResult:
        assignments = self.session.assignments
        unassigned = [self._describe(c) for c in self.session.unassigned]
        occupancy = average_occupancy(assignments)

        result = AllocationResult(
            assignments=assignments,
            unassigned_clients=unassigned,
            statistics=compute_statistics(assignments),
            occupancy_rate=occupancy,
        )
        result.warnings = self._warnings(result)

        logger.info(
            f"Allocation finished: {result.total_assigned} assigned, "
            f"{result.total_unassigned} unassigned, {result.rooms_used} room(s), "
            f"{occupancy}% average occupancy"
        )
        return result

    def _warnings(self, result: AllocationResult) -> list[str]:
        warnings = []
        if result.total_unassigned > 0:
            warnings.append(f"{result.total_unassigned} unassigned")
        if result.mixed_rooms > 0:
            warnings.append(f"{result.mixed_rooms} mixed rooms created")
        if result.occupancy_rate < LOW_OCCUPANCY_THRESHOLD:
            warnings.append(f"low average occupancy: {result.occupancy_rate}%")
        warnings.extend(self.inventory_warnings)
        return warnings

    def _describe(self, client: Client) -> UnassignedClient:
        failure = self.session.failures.get(client.id)
        if failure is not None:
            code, details = failure.code, failure.details
        elif client.gender == Gender.OTHER:
            code = UnassignedCode.MANUAL_ASSIGNMENT_REQUIRED
            details = "Clients of gender Other are placed manually"
        else:
            code = UnassignedCode.NO_MATCHING_PHASE
            details = (
                f"No allocation phase places ungrouped {client.client_type.value} clients"
            )

        return UnassignedClient(
            id=client.id,
            name=client.name,
            reason=unassigned_reason(client),
            code=code,
            details=details,
        )
