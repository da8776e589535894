"""Utility functions for allocation phases."""

from ..constants import COUPLE_RELATION, MAX_CHUNK_SIZE
from ..models import Client, Gender

# Genders the engine places without manual review, in processing order
AUTO_ASSIGNED_GENDERS = [Gender.MALE, Gender.FEMALE]


def chunk_clients(clients: list[Client], size: int = MAX_CHUNK_SIZE) -> list[list[Client]]:
    """Split an ordered client list into consecutive batches.

    Args:
        clients: Clients in processing order
        size: Maximum batch size

    Returns:
        Batches of at most ``size`` clients, preserving order
    """
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [clients[i : i + size] for i in range(0, len(clients), size)]


def group_clients(clients: list[Client]) -> dict[str, list[Client]]:
    """Collect grouped clients by group name.

    Groups appear in the order their first member appears in ``clients``,
    and members keep their relative order.
    """
    groups: dict[str, list[Client]] = {}
    for client in clients:
        if client.group_name:
            groups.setdefault(client.group_name, []).append(client)
    return groups


def split_by_gender(clients: list[Client]) -> dict[Gender, list[Client]]:
    """Partition clients by gender, preserving order within each gender."""
    partitions: dict[Gender, list[Client]] = {}
    for client in clients:
        partitions.setdefault(client.gender, []).append(client)
    return partitions


def distinct_genders(clients: list[Client]) -> set[Gender]:
    return {c.gender for c in clients}


def is_couple(clients: list[Client]) -> bool:
    """Exactly two clients who both carry the couple relation."""
    return len(clients) == 2 and all(
        (c.group_relation or "").lower() == COUPLE_RELATION.lower() for c in clients
    )


def all_vip(clients: list[Client]) -> bool:
    return bool(clients) and all(c.is_vip for c in clients)
