"""End-to-end tests for RoomAllocator."""

import pytest

from room_allocator.engine import AllocationRules, RoomAllocator, allocate_rooms, create_allocator
from room_allocator.exceptions import DuplicateIdError
from room_allocator.models import ClientType, Gender, UnassignedCode


def _check_invariants(clients, hotels, result):
    """Partition, capacity, availability and mixing properties of a result."""
    placed = [cid for a in result.assignments for cid in a.client_ids]
    left = [u.id for u in result.unassigned_clients]
    assert sorted(placed + left) == sorted(c.id for c in clients)
    assert len(set(placed)) == len(placed)

    for room in result.assignments:
        assert 1 <= room.occupant_count <= room.capacity
        assert room.utilization_rate == round(100 * room.occupant_count / room.capacity + 1e-9)
        if len(room.genders) > 1:
            assert room.is_mixed
        if room.is_mixed:
            all_vip = all(o.is_vip for o in room.occupants)
            couple = room.occupant_count == 2 and all(
                (o.group_relation or "").lower() == "couple" for o in room.occupants
            )
            assert all_vip or couple

    for hotel in hotels:
        for spec in hotel.room_types:
            used = sum(
                1
                for a in result.assignments
                if a.hotel_id == hotel.id and a.room_type == spec.type
            )
            assert used <= spec.quantity


class TestScenarios:
    """Reference scenarios for the engine."""

    def test_four_solo_males(self, make_client, make_hotel):
        clients = [make_client(gender=Gender.MALE) for _ in range(4)]
        hotels = [make_hotel("H1", ("Quad", 4, 1))]

        result = allocate_rooms(clients, hotels)

        assert len(result.assignments) == 1
        assert result.assignments[0].occupant_count == 4
        assert result.assignments[0].utilization_rate == 100
        assert result.total_unassigned == 0
        _check_invariants(clients, hotels, result)

    def test_group_of_five_split(self, make_client, make_hotel):
        clients = [
            make_client(client_type=ClientType.GROUP, group_name="Band", group_size=5)
            for _ in range(5)
        ]
        hotels = [make_hotel("H1", ("Quad", 4, 2))]

        result = allocate_rooms(clients, hotels)

        assert [a.occupant_count for a in result.assignments] == [4, 1]
        assert [a.utilization_rate for a in result.assignments] == [100, 25]
        _check_invariants(clients, hotels, result)

    def test_couple(self, make_client, make_hotel):
        clients = [
            make_client(gender=g, group_name="Pair", group_size=2, group_relation="Couple")
            for g in (Gender.MALE, Gender.FEMALE)
        ]
        hotels = [make_hotel("H1", ("Double", 2, 1))]

        result = allocate_rooms(clients, hotels)

        assert len(result.assignments) == 1
        assert result.assignments[0].is_mixed is True
        assert result.assignments[0].occupant_count == 2
        assert result.mixed_rooms == 1
        assert "1 mixed rooms created" in result.warnings

    def test_mixed_group_without_exception(self, make_client, make_hotel):
        clients = [
            make_client(gender=g, client_type=ClientType.GROUP, group_name="Trio", group_size=3)
            for g in (Gender.MALE, Gender.FEMALE, Gender.MALE)
        ]
        hotels = [make_hotel("H1", ("Double", 2, 3))]

        result = allocate_rooms(clients, hotels)

        assert len(result.assignments) == 2
        assert all(not a.is_mixed for a in result.assignments)
        _check_invariants(clients, hotels, result)


class TestRoomAllocator:
    """Tests for orchestration and the output contract."""

    def test_empty_input(self, make_hotel):
        result = allocate_rooms([], [make_hotel("H1", ("Quad", 4, 1))])

        assert result.success is True
        assert result.assignments == []
        assert result.occupancy_rate == 0
        assert result.warnings == ["low average occupancy: 0%"]

    def test_no_hotels(self, make_client):
        clients = [make_client(), make_client(client_type=ClientType.VIP)]

        result = allocate_rooms(clients, [])

        assert result.total_unassigned == 2
        assert {u.code for u in result.unassigned_clients} == {UnassignedCode.NO_FITTING_ROOM_TYPE}
        assert result.warnings[0] == "2 unassigned"

    def test_deterministic(self, make_client, sample_hotels):
        clients = [make_client(gender=g) for g in (Gender.MALE, Gender.FEMALE) * 5]

        first = allocate_rooms(clients, sample_hotels)
        second = allocate_rooms(clients, sample_hotels)

        assert first.to_dict() == second.to_dict()

    def test_runs_do_not_share_availability(self, make_client, make_hotel):
        hotels = [make_hotel("H1", ("Single", 1, 1))]
        allocator = RoomAllocator(hotels)

        first = allocator.allocate([make_client()])
        second = allocator.allocate([make_client()])

        assert first.assignments[0].room_id == "H1_Single_1"
        assert second.assignments[0].room_id == "H1_Single_1"

    def test_priority_decides_scarce_rooms(self, make_client, make_hotel):
        solo = make_client()
        vip = make_client(client_type=ClientType.VIP)

        result = allocate_rooms([solo, vip], [make_hotel("H1", ("Single", 1, 1))])

        assert result.assignments[0].client_ids == [vip.id]
        assert [u.id for u in result.unassigned_clients] == [solo.id]

    def test_optimizer_can_be_disabled(self, make_client, make_hotel):
        seed = make_client(gender=Gender.FEMALE)
        influencer = make_client(gender=Gender.FEMALE, client_type=ClientType.INFLUENCER)
        hotels = [make_hotel("H1", ("Quad", 4, 1))]

        result = allocate_rooms([seed, influencer], hotels, {"optimizeOccupancy": False})

        assert result.assignments[0].client_ids == [seed.id]
        assert [u.id for u in result.unassigned_clients] == [influencer.id]

    def test_staff_only_placed_through_groups(self, make_client, sample_hotels):
        staff = make_client(client_type=ClientType.STAFF)
        grouped = make_client(client_type=ClientType.STAFF, group_name="Crew", group_size=1)

        result = allocate_rooms([staff, grouped], sample_hotels, {"optimizeOccupancy": False})

        assert [u.id for u in result.unassigned_clients] == [staff.id]
        assert result.unassigned_clients[0].code == UnassignedCode.NO_MATCHING_PHASE

    def test_optimizer_places_leftover_influencer(self, make_client, make_hotel):
        seed = make_client(gender=Gender.FEMALE)
        influencer = make_client(gender=Gender.FEMALE, client_type=ClientType.INFLUENCER)

        result = allocate_rooms([seed, influencer], [make_hotel("H1", ("Quad", 4, 1))])

        assert sorted(result.assignments[0].client_ids) == sorted([seed.id, influencer.id])
        assert result.total_unassigned == 0

    def test_accepts_dict_inputs(self, sample_client_records):
        hotels = [
            {
                "_id": "grand",
                "name": "Grand Hotel",
                "roomTypes": [
                    {"type": "Double", "capacity": 2, "quantity": 4},
                    {"type": "Quad", "capacity": 4, "quantity": 1},
                ],
            }
        ]

        result = RoomAllocator(hotels).allocate(sample_client_records)

        assert result.total_assigned + result.total_unassigned == len(sample_client_records)
        assert result.statistics.by_hotel == {"Grand Hotel": result.total_assigned}

    def test_duplicate_client_ids(self, make_client, make_hotel):
        clients = [make_client(client_id="1"), make_client(client_id="1")]

        with pytest.raises(DuplicateIdError, match="client ids: 1"):
            allocate_rooms(clients, [make_hotel("H1", ("Double", 2, 1))])

    def test_mixed_sample_roster(self, make_client, sample_hotels):
        clients = [
            make_client(gender=Gender.FEMALE, client_type=ClientType.VIP),
            make_client(gender=Gender.MALE, client_type=ClientType.VIP),
            *[
                make_client(gender=g, client_type=ClientType.GROUP, group_name="Red", group_size=3)
                for g in (Gender.MALE, Gender.MALE, Gender.FEMALE)
            ],
            *[make_client(gender=g) for g in (Gender.MALE, Gender.FEMALE, Gender.OTHER)],
        ]

        result = allocate_rooms(clients, sample_hotels)

        _check_invariants(clients, sample_hotels, result)
        other = [u for u in result.unassigned_clients if u.reason == "requires manual assignment"]
        assert len(other) == 1
        assert other[0].code == UnassignedCode.MANUAL_ASSIGNMENT_REQUIRED


class TestCreateAllocator:
    """Tests for create_allocator factory."""

    def test_defaults(self, sample_hotels):
        allocator = create_allocator(sample_hotels)
        assert allocator.rules == AllocationRules()

    def test_rules_file_and_overrides(self, sample_hotels, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text('{"rules": {"allowMixedRooms": true, "optimizeOccupancy": false}}')

        allocator = create_allocator(
            sample_hotels,
            rules_path=rules_file,
            overrides={"optimize_occupancy": True, "vip_can_be_mixed": None},
        )

        assert allocator.rules.allow_mixed_rooms is True
        assert allocator.rules.optimize_occupancy is True
        assert allocator.rules.vip_can_be_mixed is True

    def test_invalid_rules_file(self, sample_hotels, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text("[1, 2]")

        with pytest.raises(ValueError):
            create_allocator(sample_hotels, rules_path=rules_file)
