"""Processing order for unassigned clients."""

from ..constants import CLIENT_TYPE_PRIORITY, UNRANKED_PRIORITY
from ..models import Client


def type_priority(client: Client) -> int:
    """Priority rank of a client's type (lower is processed first)."""
    return CLIENT_TYPE_PRIORITY.get(client.client_type.value, UNRANKED_PRIORITY)


def sort_key(client: Client) -> tuple:
    """Sort key implementing the processing order.

    Precedence:
    1. Client type: VIP, Influencer, Staff, Group, Solo, then anything else
    2. Two grouped clients: larger group first, and no further tiebreak
    3. Grouped clients before ungrouped ones
    4. Two ungrouped clients: gender label, ascending
    """
    if client.has_group:
        return (type_priority(client), 0, -client.group_size, "")
    return (type_priority(client), 1, 0, client.gender.value)


def sort_clients_by_priority(clients: list[Client]) -> list[Client]:
    """Return clients in a deterministic processing order.

    The sort is stable, so clients with identical keys keep input order.

    Args:
        clients: Clients in input order

    Returns:
        New list in processing order
    """
    return sorted(clients, key=sort_key)
