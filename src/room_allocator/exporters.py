"""Export functionality for allocation results."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .models import AllocationResult

ROOMING_COLUMNS = [
    "hotel_id",
    "hotel_name",
    "room_id",
    "room_type",
    "capacity",
    "utilization_rate",
    "is_mixed",
    "client_id",
    "name",
    "gender",
    "client_type",
    "group_name",
]
UNASSIGNED_COLUMNS = ["id", "name", "reason", "code", "details"]

# Excel styling
FONT_HEADER = Font(bold=True, color="FFFFFF")
FILL_HEADER = PatternFill(start_color="305496", end_color="305496", fill_type="solid")
FILL_MIXED = PatternFill(start_color="FCE4D6", end_color="FCE4D6", fill_type="solid")
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def rooming_rows(result: AllocationResult) -> list[dict]:
    """Flatten assignments to one row per occupant."""
    rows = []
    for room in result.assignments:
        for occupant in room.occupants:
            rows.append(
                {
                    "hotel_id": room.hotel_id,
                    "hotel_name": room.hotel_name,
                    "room_id": room.room_id,
                    "room_type": room.room_type,
                    "capacity": room.capacity,
                    "utilization_rate": room.utilization_rate,
                    "is_mixed": room.is_mixed,
                    "client_id": occupant.client_id,
                    "name": occupant.name,
                    "gender": occupant.gender.value,
                    "client_type": occupant.client_type.value,
                    "group_name": occupant.group_name or "",
                }
            )
    return rows


def summary_rows(result: AllocationResult) -> list[dict]:
    """Headline metrics followed by per-dimension counts and warnings."""
    rows = [
        {"metric": "total_assigned", "value": result.total_assigned},
        {"metric": "total_unassigned", "value": result.total_unassigned},
        {"metric": "rooms_used", "value": result.rooms_used},
        {"metric": "mixed_rooms", "value": result.mixed_rooms},
        {"metric": "occupancy_rate", "value": result.occupancy_rate},
    ]
    stats = result.statistics
    for prefix, counts in (
        ("type", stats.by_type),
        ("gender", stats.by_gender),
        ("hotel", stats.by_hotel),
    ):
        for key, count in counts.items():
            rows.append({"metric": f"{prefix}:{key}", "value": count})
    for warning in result.warnings:
        rows.append({"metric": "warning", "value": warning})
    return rows


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: AllocationResult, output_path: str | Path) -> Path:
        """Export allocation result.

        Args:
            result: AllocationResult to export
            output_path: Path to output file or directory

        Returns:
            Path that was written
        """
        pass


class JSONExporter(BaseExporter):
    """Export the result contract as JSON."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: AllocationResult, output_path: str | Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )
        return output_path


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: AllocationResult, output_path: str | Path) -> Path:
        """Export allocation result to CSV files.

        Creates three files:
        - assignments.csv: one row per placed client
        - unassigned.csv: clients without a room
        - summary.csv: metrics, breakdowns and warnings

        Args:
            result: AllocationResult to export
            output_path: Path to output directory

        Returns:
            The output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "assignments.csv", ROOMING_COLUMNS, rooming_rows(result))
        self._write_csv(
            output_dir / "unassigned.csv",
            UNASSIGNED_COLUMNS,
            [u.to_dict() for u in result.unassigned_clients],
        )
        self._write_csv(output_dir / "summary.csv", ["metric", "value"], summary_rows(result))
        return output_dir

    def _write_csv(self, output_path: Path, fieldnames: list[str], rows: list[dict]) -> None:
        """Write rows to CSV file (header only when there are no rows)."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: AllocationResult, output_path: str | Path) -> Path:
        """Export allocation result to an Excel workbook.

        Creates workbook with sheets:
        - Rooming List: one row per placed client, mixed rooms highlighted
        - Unassigned: clients without a room and why
        - Summary: metrics, breakdowns and warnings

        Args:
            result: AllocationResult to export
            output_path: Path to output Excel file

        Returns:
            Path to the workbook
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            rooming = pd.DataFrame(rooming_rows(result), columns=ROOMING_COLUMNS)
            rooming.to_excel(writer, sheet_name="Rooming List", index=False)

            unassigned = pd.DataFrame(
                [u.to_dict() for u in result.unassigned_clients], columns=UNASSIGNED_COLUMNS
            )
            unassigned.to_excel(writer, sheet_name="Unassigned", index=False)

            summary = pd.DataFrame(summary_rows(result), columns=["metric", "value"])
            summary.to_excel(writer, sheet_name="Summary", index=False)

            for ws in writer.sheets.values():
                self._style_sheet(ws)
            self._highlight_mixed(writer.sheets["Rooming List"])

        return output_path

    def _style_sheet(self, ws) -> None:
        """Style the header row and size columns to their content."""
        for cell in ws[1]:
            cell.font = FONT_HEADER
            cell.fill = FILL_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

        for column in ws.columns:
            letter = column[0].column_letter
            width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
            ws.column_dimensions[letter].width = min(max(10, width + 2), 60)

        ws.freeze_panes = "A2"

    def _highlight_mixed(self, ws) -> None:
        mixed_col = ROOMING_COLUMNS.index("is_mixed") + 1
        for row in ws.iter_rows(min_row=2):
            if row[mixed_col - 1].value is True:
                for cell in row:
                    cell.fill = FILL_MIXED


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
