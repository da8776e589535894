"""Group phase: place named groups, splitting them only when needed."""

import logging

from ..constants import MEN_SUFFIX, WOMEN_SUFFIX
from ..models import Client, Gender, UnassignedCode
from .rooms import RoomFinder
from .session import AllocationSession
from .utils import (
    all_vip,
    chunk_clients,
    distinct_genders,
    group_clients,
    is_couple,
    split_by_gender,
)

logger = logging.getLogger(__name__)


class GroupAssigner:
    """Assigns every named group in the unassigned pool.

    Rules:
    1. Same-gender group: one room for the whole group if any type fits,
       otherwise batches of at most four in roster order.
    2. Mixed group: stays together only when every member is VIP, or it is a
       two-person couple (or the mixed-room override is on).
    3. Mixed groups that cannot stay together are split into "(Men)" and
       "(Women)" sub-groups, each handled as in rule 1. Members of gender
       Other are left for manual assignment.
    """

    def __init__(self, session: AllocationSession, finder: RoomFinder) -> None:
        self.session = session
        self.finder = finder
        self.rules = session.rules

    def run(self) -> None:
        """Process all groups present in the pool."""
        groups = group_clients(self.session.unassigned)
        logger.info(f"Assigning {len(groups)} group(s)")

        for group_name, members in groups.items():
            logger.debug(f"Group '{group_name}': {len(members)} member(s)")
            if len(distinct_genders(members)) > 1:
                self._assign_mixed_group(group_name, members)
            else:
                self._assign_same_gender_group(group_name, members)

    def can_stay_together(self, members: list[Client]) -> bool:
        """Whether a mixed group may share one room."""
        if self.rules.allow_mixed_rooms:
            return True
        if self.rules.vip_can_be_mixed and all_vip(members):
            return True
        return is_couple(members)

    def _assign_mixed_group(self, group_name: str, members: list[Client]) -> None:
        if self.can_stay_together(members):
            if self.rules.keep_groups_together and self.finder.assign(
                members, allow_mixed=True, label=f"group '{group_name}'"
            ):
                return
        else:
            self.session.record_failure(
                members,
                UnassignedCode.MIXING_NOT_ALLOWED,
                f"Mixed group '{group_name}' cannot share a room",
            )

        partitions = split_by_gender(members)
        others = partitions.get(Gender.OTHER, [])
        if others:
            self.session.record_failure(
                others,
                UnassignedCode.MANUAL_ASSIGNMENT_REQUIRED,
                f"Split of mixed group '{group_name}' has no sub-group for gender Other",
            )

        men = partitions.get(Gender.MALE, [])
        women = partitions.get(Gender.FEMALE, [])
        if men:
            self._assign_same_gender_group(f"{group_name} {MEN_SUFFIX}", men)
        if women:
            self._assign_same_gender_group(f"{group_name} {WOMEN_SUFFIX}", women)

    def _assign_same_gender_group(self, group_name: str, members: list[Client]) -> None:
        if self.rules.keep_groups_together and self.finder.assign(
            members, allow_mixed=False, label=f"group '{group_name}'"
        ):
            return

        chunks = chunk_clients(members)
        logger.debug(f"Splitting group '{group_name}' into {len(chunks)} room(s)")
        for index, chunk in enumerate(chunks, 1):
            self.finder.assign(
                chunk, allow_mixed=False, label=f"group '{group_name}' part {index}"
            )
