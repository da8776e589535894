"""VIP and solo phases for clients not resolved through a group."""

import logging

from ..models import ClientType, Gender, UnassignedCode
from .rooms import RoomFinder
from .session import AllocationSession
from .utils import AUTO_ASSIGNED_GENDERS, chunk_clients, split_by_gender

logger = logging.getLogger(__name__)


class VipAssigner:
    """Places each remaining VIP in a room of their own."""

    def __init__(self, session: AllocationSession, finder: RoomFinder) -> None:
        self.session = session
        self.finder = finder

    def run(self) -> None:
        vips = self.session.pool_of_type(ClientType.VIP)
        logger.info(f"Assigning {len(vips)} remaining VIP(s)")
        for vip in vips:
            self.finder.assign([vip], allow_mixed=True, label=f"VIP '{vip.id}'")


class SoloAssigner:
    """Batches remaining Solo clients by gender into shared rooms."""

    def __init__(self, session: AllocationSession, finder: RoomFinder) -> None:
        self.session = session
        self.finder = finder

    def run(self) -> None:
        solos = self.session.pool_of_type(ClientType.SOLO)
        logger.info(f"Assigning {len(solos)} solo client(s)")
        partitions = split_by_gender(solos)

        for gender in AUTO_ASSIGNED_GENDERS:
            clients = partitions.get(gender, [])
            for index, chunk in enumerate(chunk_clients(clients), 1):
                self.finder.assign(
                    chunk,
                    allow_mixed=False,
                    label=f"{gender.value.lower()} solo batch {index}",
                )

        others = partitions.get(Gender.OTHER, [])
        if others:
            self.session.record_failure(
                others,
                UnassignedCode.MANUAL_ASSIGNMENT_REQUIRED,
                "Solo clients of gender Other are not batched automatically",
            )
