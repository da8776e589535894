"""Tests for validation functions."""

from room_allocator.models import ClientType, Gender, HotelInventory, RoomTypeSpec
from room_allocator.validators import (
    validate_client_record,
    validate_count,
    validate_gender,
    validate_roster,
)


class TestValidateCount:
    """Tests for validate_count function."""

    def test_valid(self):
        assert validate_count("3", "capacity") == (True, None)
        assert validate_count(0, "quantity") == (True, None)

    def test_zero_not_allowed(self):
        valid, error = validate_count(0, "capacity", allow_zero=False)
        assert not valid
        assert "positive" in error

    def test_negative(self):
        valid, error = validate_count(-2, "quantity")
        assert not valid
        assert "Negative" in error

    def test_fraction(self):
        assert validate_count("1.5", "capacity")[0] is False

    def test_not_a_number(self):
        valid, error = validate_count("two", "capacity")
        assert not valid
        assert "two" in error

    def test_empty(self):
        assert validate_count("", "capacity") == (False, "capacity is empty")

    def test_non_finite(self):
        assert validate_count("nan", "capacity") == (False, "Invalid capacity value: 'nan'")
        assert validate_count(float("inf"), "quantity")[0] is False


class TestValidateClientRecord:
    """Tests for validate_client_record function."""

    def test_valid(self):
        assert validate_client_record({"id": "1", "gender": "F", "client_type": "VIP"}) == (True, None)

    def test_missing_id(self):
        valid, error = validate_client_record({"gender": "F"})
        assert not valid
        assert "id" in error

    def test_bad_gender(self):
        assert validate_client_record({"id": "1", "gender": "?"})[0] is False
        assert validate_gender("?")[0] is False

    def test_bad_group_size(self):
        record = {"id": "1", "gender": "M", "group_size": "-1"}
        assert validate_client_record(record)[0] is False


class TestValidateRoster:
    """Tests for validate_roster function."""

    def test_clean_roster(self, make_client, sample_hotels):
        report = validate_roster([make_client(), make_client()], sample_hotels)
        assert report.is_valid
        assert report.warnings == []

    def test_duplicate_client_ids(self, make_client, sample_hotels):
        clients = [make_client(client_id="a"), make_client(client_id="a")]
        report = validate_roster(clients, sample_hotels)
        assert not report.is_valid
        assert report.errors == ["Duplicate client ids: a"]

    def test_repeated_room_type(self):
        hotel = HotelInventory("h1", "Inn", (RoomTypeSpec("Double", 2, 1), RoomTypeSpec("Double", 2, 4)))
        report = validate_roster([], [hotel])
        assert not report.is_valid
        assert "Double" in report.errors[0]

    def test_inventory_warnings(self):
        hotels = [
            HotelInventory("h1", "Empty"),
            HotelInventory("h2", "Closed", (RoomTypeSpec("Double", 2, 0),)),
        ]
        report = validate_roster([], hotels)
        assert report.is_valid
        assert "Hotel 'Empty' has no room types" in report.warnings
        assert "Room type 'Double' in hotel 'Closed' provides no beds" in report.warnings

    def test_group_warnings(self, make_client, sample_hotels):
        clients = [
            make_client(group_name="Pair", group_size=3, group_relation="Couple"),
            make_client(group_name="Pair", group_size=3, group_relation="Couple"),
        ]
        report = validate_roster(clients, sample_hotels)
        assert "Group 'Pair' declares 3 member(s) but the roster lists 2" in report.warnings

    def test_couple_size_warning(self, make_client, sample_hotels):
        clients = [
            make_client(group_name="Pair", group_size=3, group_relation="Couple") for _ in range(3)
        ]
        report = validate_roster(clients, sample_hotels)
        assert "Group 'Pair' is marked as a couple but has 3 member(s)" in report.warnings

    def test_other_gender_and_capacity(self, make_client):
        hotel = HotelInventory("h1", "Tiny", (RoomTypeSpec("Single", 1, 1),))
        clients = [make_client(gender=Gender.OTHER), make_client(client_type=ClientType.VIP)]
        report = validate_roster(clients, [hotel])
        assert any("gender Other" in w for w in report.warnings)
        assert "Roster has 2 client(s) but inventory offers 1 bed(s)" in report.warnings

    def test_to_dict(self):
        report = validate_roster([], [])
        assert report.to_dict() == {"valid": True, "errors": [], "warnings": []}
