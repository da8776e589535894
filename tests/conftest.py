"""Test fixtures for room allocator tests."""

import itertools

import pytest

from room_allocator.engine import AllocationRules, AllocationSession, RoomFinder
from room_allocator.models import Client, ClientType, Gender, HotelInventory, RoomTypeSpec


@pytest.fixture
def make_client():
    """Factory for clients with sequential ids."""
    counter = itertools.count(1)

    def _make(
        gender=Gender.MALE,
        client_type=ClientType.SOLO,
        group_name=None,
        group_size=0,
        group_relation=None,
        client_id=None,
    ):
        number = next(counter)
        return Client(
            id=client_id or f"c{number}",
            first_name=f"First{number}",
            last_name=f"Last{number}",
            gender=gender,
            client_type=client_type,
            group_name=group_name,
            group_size=group_size,
            group_relation=group_relation,
        )

    return _make


@pytest.fixture
def make_hotel():
    """Factory for a hotel from (type, capacity, quantity) tuples."""

    def _make(hotel_id="H1", *room_types, name=None):
        return HotelInventory(
            id=hotel_id,
            name=name or f"Hotel {hotel_id}",
            room_types=tuple(RoomTypeSpec(t, c, q) for t, c, q in room_types),
        )

    return _make


@pytest.fixture
def make_session():
    """Factory for a session plus its room finder."""

    def _make(clients, hotels, rules=None):
        session = AllocationSession.start(clients, hotels, rules or AllocationRules())
        return session, RoomFinder(session)

    return _make


@pytest.fixture
def sample_hotels():
    """Two hotels with a mix of room types."""
    return [
        HotelInventory(
            id="grand",
            name="Grand Hotel",
            room_types=(
                RoomTypeSpec("Single", 1, 2),
                RoomTypeSpec("Double", 2, 3),
                RoomTypeSpec("Quad", 4, 2),
            ),
        ),
        HotelInventory(
            id="annex",
            name="Annex",
            room_types=(RoomTypeSpec("Suite", 6, 1),),
        ),
    ]


@pytest.fixture
def sample_client_records():
    """Raw roster records as they come from the back office."""
    return [
        {"_id": "v1", "firstName": "Ana", "lastName": "Lopez", "gender": "Female", "clientType": "VIP"},
        {"_id": "v2", "firstName": "Ben", "lastName": "Okoro", "gender": "Male", "clientType": "VIP"},
        {
            "_id": "g1",
            "firstName": "Carl",
            "lastName": "Dunn",
            "gender": "Male",
            "clientType": "Group",
            "groupName": "Team Red",
            "groupSize": 3,
        },
        {
            "_id": "g2",
            "firstName": "Dan",
            "lastName": "Ek",
            "gender": "Male",
            "clientType": "Group",
            "groupName": "Team Red",
            "groupSize": 3,
        },
        {
            "_id": "g3",
            "firstName": "Eve",
            "lastName": "Fox",
            "gender": "Female",
            "clientType": "Group",
            "groupName": "Team Red",
            "groupSize": 3,
        },
        {"_id": "s1", "firstName": "Finn", "lastName": "Gale", "gender": "Male", "clientType": "Solo"},
        {"_id": "s2", "firstName": "Gus", "lastName": "Hale", "gender": "Male", "clientType": "Solo"},
        {"_id": "s3", "firstName": "Hana", "lastName": "Ito", "gender": "Female", "clientType": "Solo"},
    ]
