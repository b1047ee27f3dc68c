"""Spreadsheet I/O: input heritage-site rows in, enriched rows out.

Both sides are ``.xlsx`` workbooks.  The input is read from the first
worksheet with the first row as header; the output is a single ``Results``
sheet with a bold, frozen header row.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from zipfile import BadZipFile

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from heritage.config import settings
from heritage.scraper.models import InputRecord, OutputRecord

OUTPUT_COLUMNS = ["Name", "Location", "Summary", "Content"]
SOURCE_COLUMNS = ["URL", "Status"]


class DatasetError(ValueError):
    """The input workbook is missing, unreadable, or lacks a required column."""


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def load_records(
    path: Path | str,
    name_field: str | None = None,
    location_field: str | None = None,
) -> list[InputRecord]:
    """Read every data row of the first worksheet in *path*.

    Fully empty rows are skipped.  Column names default to
    ``settings.name_field`` / ``settings.location_field``.

    Raises:
        DatasetError: If the file cannot be opened or a required column is
            missing from the header row.
    """
    name_field = name_field or settings.name_field
    location_field = location_field or settings.location_field

    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, BadZipFile) as exc:
        raise DatasetError(f"Cannot read input workbook {path}: {exc}") from exc

    try:
        rows = wb.worksheets[0].iter_rows(values_only=True)
        header = [_cell_text(cell) for cell in next(rows, ())]
        missing = [col for col in (name_field, location_field) if col not in header]
        if missing:
            raise DatasetError(
                f"Input workbook {path} is missing column(s): {', '.join(missing)}"
            )

        records: list[InputRecord] = []
        for values in rows:
            if all(v is None or _cell_text(v) == "" for v in values):
                continue
            fields = {col: val for col, val in zip(header, values) if col}
            records.append(
                InputRecord(
                    name=_cell_text(fields.get(name_field)),
                    location=_cell_text(fields.get(location_field)),
                    fields=fields,
                )
            )
        return records
    finally:
        wb.close()


def save_records(
    records: list[OutputRecord],
    path: Path | str,
    sheet_name: str = "Results",
    with_source: bool = False,
) -> Path:
    """Write *records* to a fresh workbook at *path* and return the path.

    The parent directory is created if needed.  Columns are
    ``Name, Location, Summary, Content`` (plus ``URL, Status`` when
    *with_source* is set).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = OUTPUT_COLUMNS + (SOURCE_COLUMNS if with_source else [])

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]  # Excel limit

    ws.append(columns)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    for record in records:
        row = record.to_row(with_source=with_source)
        # Control characters from scraped text are rejected by openpyxl.
        ws.append([ILLEGAL_CHARACTERS_RE.sub("", row[col]) for col in columns])

    # Long content columns are capped so the sheet stays readable.
    for col_idx, header in enumerate(columns, start=1):
        max_len = len(header)
        for row_idx in range(2, min(102, ws.max_row + 1)):
            value = ws.cell(row=row_idx, column=col_idx).value
            if value is not None:
                max_len = max(max_len, len(str(value)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 80)

    wb.save(path)
    return path
