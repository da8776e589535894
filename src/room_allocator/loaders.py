"""Readers for client rosters and hotel inventories."""

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from .constants import (
    CLIENT_REQUIRED_COLUMNS,
    HOTEL_REQUIRED_COLUMNS,
    SUPPORTED_INPUT_SUFFIXES,
)
from .exceptions import (
    InvalidClientError,
    InvalidHotelError,
    MalformedFileError,
    MissingColumnsError,
    UnsupportedFormatError,
)
from .models import Client, HotelInventory, RoomTypeSpec
from .normalization import is_blank, normalize_optional_text, to_snake_case
from .validators import check_unique_ids, validate_client_record, validate_count

logger = logging.getLogger(__name__)

# Column aliases seen in exports from the event back office
COLUMN_ALIASES = {
    "_id": "id",
    "client_id": "id",
    "type": "client_type",
    "group": "group_name",
    "relation": "group_relation",
    "hotel": "hotel_name",
    "room_capacity": "capacity",
    "rooms": "quantity",
}

_KNOWN_COLUMNS = {
    "id",
    "first_name",
    "last_name",
    "gender",
    "client_type",
    "group_name",
    "group_size",
    "group_relation",
    "hotel_id",
    "hotel_name",
    "room_type",
    "capacity",
    "quantity",
}


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_INPUT_SUFFIXES:
        raise UnsupportedFormatError(path)
    return suffix


def read_table(path: Path | str) -> pd.DataFrame:
    """Read a CSV or Excel file as strings with snake_case columns.

    Args:
        path: Path to a .csv or .xlsx file

    Returns:
        DataFrame with normalized column names and blank rows dropped
    """
    path = Path(path)
    suffix = _check_suffix(path)
    if suffix == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
    elif suffix == ".xlsx":
        df = pd.read_excel(path, dtype=str, engine="openpyxl").fillna("")
    else:
        raise UnsupportedFormatError(path)

    df.columns = [to_snake_case(c) for c in df.columns]
    df = df.rename(columns=lambda c: c if c in _KNOWN_COLUMNS else COLUMN_ALIASES.get(c, c))
    if not df.empty:
        blank_rows = df.apply(lambda row: all(is_blank(v) for v in row), axis=1)
        df = df[~blank_rows]
    return df.reset_index(drop=True)


def _require_columns(df: pd.DataFrame, required: list[str], source: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise MissingColumnsError(source, missing)


def _load_json(path: Path, key: str) -> list[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedFileError(path, f"invalid JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise MalformedFileError(path, f"expected a list of {key}")
    if not all(isinstance(item, dict) for item in data):
        raise MalformedFileError(path, f"every entry in {key} must be an object")
    return data


def _snake_record(record: dict[str, Any]) -> dict[str, Any]:
    snake: dict[str, Any] = {}
    for key, value in record.items():
        name = to_snake_case(key)
        if name not in _KNOWN_COLUMNS:
            name = COLUMN_ALIASES.get(name, name)
        snake.setdefault(name, value)
    return snake


def load_clients(path: Path | str) -> list[Client]:
    """Load a client roster.

    Accepted formats:
    - .json: a list of client objects, or {"clients": [...]}
    - .csv / .xlsx: one row per client

    Missing group sizes are filled with the number of roster entries that
    share the group name.

    Args:
        path: Path to the roster file

    Returns:
        Clients in file order

    Raises:
        UnsupportedFormatError: Unknown file extension
        MissingColumnsError: Tabular file without required columns
        InvalidClientError: A record cannot be parsed
        DuplicateIdError: Client ids are not unique
    """
    path = Path(path)
    suffix = _check_suffix(path)

    if suffix == ".json":
        records = [_snake_record(r) for r in _load_json(path, "clients")]
    else:
        df = read_table(path)
        _require_columns(df, CLIENT_REQUIRED_COLUMNS, path.name)
        records = df.to_dict("records")

    return parse_clients(records)


def parse_clients(records: list[dict[str, Any]]) -> list[Client]:
    """Build clients from snake_case records.

    Args:
        records: Raw client records

    Returns:
        Clients in record order
    """
    group_counts: dict[str, int] = {}
    for record in records:
        group = normalize_optional_text(record.get("group_name"))
        if group:
            group_counts[group] = group_counts.get(group, 0) + 1

    clients = []
    for index, record in enumerate(records):
        client_id = None if is_blank(record.get("id")) else str(record["id"]).strip()
        valid, error = validate_client_record(record)
        if not valid:
            raise InvalidClientError(client_id or f"row {index + 1}", error or "")

        record = dict(record, id=client_id)
        group = normalize_optional_text(record.get("group_name"))
        if group and (is_blank(record.get("group_size")) or int(float(record["group_size"])) == 0):
            record["group_size"] = group_counts[group]
        elif not is_blank(record.get("group_size")):
            record["group_size"] = int(float(record["group_size"]))

        try:
            clients.append(Client.from_dict(record))
        except (KeyError, ValueError) as exc:
            raise InvalidClientError(client_id, str(exc)) from exc

    check_unique_ids([c.id for c in clients], "client")
    logger.info(f"Loaded {len(clients)} client(s)")
    return clients


def load_hotels(path: Path | str) -> list[HotelInventory]:
    """Load hotel inventories.

    Accepted formats:
    - .json: a list of hotels with nested "roomTypes" (or "room_types"),
      or {"hotels": [...]}
    - .csv / .xlsx: one row per room type with hotel_id, hotel_name,
      room_type, capacity, quantity; hotels and room types keep file order

    Args:
        path: Path to the inventory file

    Returns:
        Hotels in file order

    Raises:
        UnsupportedFormatError: Unknown file extension
        MissingColumnsError: Tabular file without required columns
        InvalidHotelError: A capacity or quantity is not a whole number
        DuplicateIdError: Hotel ids are not unique (JSON)
    """
    path = Path(path)
    suffix = _check_suffix(path)

    if suffix == ".json":
        hotels = [_parse_hotel(_snake_record(h)) for h in _load_json(path, "hotels")]
    else:
        df = read_table(path)
        _require_columns(df, HOTEL_REQUIRED_COLUMNS, path.name)
        hotels = _hotels_from_rows(df)

    check_unique_ids([h.id for h in hotels], "hotel")
    logger.info(f"Loaded {len(hotels)} hotel(s)")
    return hotels


def _parse_room_type(hotel_id: str, data: dict[str, Any]) -> RoomTypeSpec:
    room_type = normalize_optional_text(data.get("type") or data.get("room_type"))
    if not room_type:
        raise InvalidHotelError(hotel_id, "room type label is empty")

    values = {}
    for field_name in ("capacity", "quantity"):
        valid, error = validate_count(data.get(field_name), field_name)
        if not valid:
            raise InvalidHotelError(hotel_id, f"room type '{room_type}': {error}")
        values[field_name] = int(float(data[field_name]))

    return RoomTypeSpec(type=room_type, capacity=values["capacity"], quantity=values["quantity"])


def _parse_hotel(data: dict[str, Any]) -> HotelInventory:
    if is_blank(data.get("id")) and is_blank(data.get("hotel_id")):
        raise InvalidHotelError(None, "hotel id is empty")
    hotel_id = str(data.get("id") if not is_blank(data.get("id")) else data["hotel_id"]).strip()
    name = normalize_optional_text(data.get("hotel_name") or data.get("name")) or hotel_id
    raw_types = data.get("room_types") or []
    if not isinstance(raw_types, list) or not all(isinstance(rt, dict) for rt in raw_types):
        raise InvalidHotelError(hotel_id, "room types must be a list of objects")
    room_types = tuple(
        _parse_room_type(hotel_id, {to_snake_case(k): v for k, v in rt.items()})
        for rt in raw_types
    )
    return HotelInventory(id=hotel_id, name=name, room_types=room_types)


def _hotels_from_rows(df: pd.DataFrame) -> list[HotelInventory]:
    hotels = []
    for hotel_id, rows in df.groupby("hotel_id", sort=False):
        hotel_id = str(hotel_id).strip()
        if not hotel_id:
            raise InvalidHotelError(None, "hotel id is empty")

        name_column = "hotel_name" if "hotel_name" in rows.columns else "name"
        names = [n for n in rows.get(name_column, pd.Series(dtype=str)) if not is_blank(n)]
        room_types = tuple(
            _parse_room_type(hotel_id, row) for row in rows.to_dict("records")
        )
        hotels.append(
            HotelInventory(
                id=hotel_id,
                name=normalize_optional_text(names[0]) if names else hotel_id,
                room_types=room_types,
            )
        )
    return hotels

