"""Custom exceptions for roster and inventory input."""

from pathlib import Path


class AllocationInputError(Exception):
    """Base exception for invalid allocation input."""

    pass


class InvalidClientError(AllocationInputError):
    """A client record cannot be used."""

    def __init__(self, client_id: str | None, message: str):
        self.client_id = client_id
        location = f" '{client_id}'" if client_id else ""
        super().__init__(f"Invalid client{location}: {message}")


class InvalidHotelError(AllocationInputError):
    """A hotel inventory record cannot be used."""

    def __init__(self, hotel_id: str | None, message: str):
        self.hotel_id = hotel_id
        location = f" '{hotel_id}'" if hotel_id else ""
        super().__init__(f"Invalid hotel{location}: {message}")


class DuplicateIdError(AllocationInputError):
    """The same identifier appears more than once."""

    def __init__(self, kind: str, ids: list[str]):
        self.kind = kind
        self.ids = ids
        super().__init__(f"Duplicate {kind} ids: {', '.join(ids)}")


class MissingColumnsError(AllocationInputError):
    """A tabular input file lacks required columns."""

    def __init__(self, source: str, columns: list[str]):
        self.source = source
        self.columns = columns
        super().__init__(f"{source}: missing required columns: {', '.join(columns)}")


class UnsupportedFormatError(AllocationInputError):
    """Input file has an extension the loaders cannot read."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(
            f"Unsupported input format '{self.path.suffix}' for {self.path.name}. "
            "Expected .json, .csv or .xlsx"
        )


class MalformedFileError(AllocationInputError):
    """Input file cannot be parsed or has the wrong structure."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path.name}: {reason}")
