"""
Member file parsing - CSV and XLSX uploads.

Functional Core - bytes in, members out.

Expected headers: username, tier, start, end and optionally isModerator.
Header lookup is case-insensitive.
"""

from __future__ import annotations

import csv
import io
import re
import zipfile
from datetime import date, datetime
from typing import Any
from xml.etree.ElementTree import ParseError

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from moddash.domain.entities import Member

from .models import (
    IMPORT_FAILED_MESSAGE,
    LEGACY_EXCEL_MESSAGE,
    NO_ROWS_MESSAGE,
    MemberImportError,
)

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")
_SPREADSHEET_RE = re.compile(r"\.(xlsx|xlsm)$", re.IGNORECASE)
# Binary Excel formats openpyxl cannot open
_LEGACY_EXCEL_RE = re.compile(r"\.(xls|xlsb)$", re.IGNORECASE)
_TRUE_RE = re.compile(r"^true$", re.IGNORECASE)


def is_spreadsheet(filename: str, content_type: str | None = None) -> bool:
    if _SPREADSHEET_RE.search(filename or ""):
        return True
    return bool(content_type) and "sheet" in (content_type or "")


def parse_tier(value: Any) -> int:
    """Plan level from a cell. Blank, non-numeric or < 1 means tier 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, int | float):
        tier = int(value) if float(value).is_integer() else 0
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 1
        tier = int(number) if number.is_integer() else 0
    return tier if tier >= 1 else 1


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return bool(_TRUE_RE.match(str(value if value is not None else "").strip()))


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime | date):
        return value.isoformat()
    return str(value).strip()


# --- Spreadsheets ---

# What a damaged workbook raises, whether at open time or while the
# read-only worksheet streams its XML
_WORKBOOK_ERRORS = (
    InvalidFileException,
    zipfile.BadZipFile,
    ParseError,
    KeyError,
    IndexError,
    OSError,
    ValueError,
)


def _sheet_members(ws: Any) -> list[Member]:
    rows = ws.iter_rows(values_only=True)
    header_row = next(rows, None)
    if header_row is None:
        return []
    headers = [_cell_text(h).lower() for h in header_row]

    members: list[Member] = []
    for raw in rows:
        if raw is None or all(v is None or str(v).strip() == "" for v in raw):
            continue
        record = {h: (raw[i] if i < len(raw) else "") for i, h in enumerate(headers) if h}
        members.append(
            Member(
                username=_cell_text(record.get("username")),
                tier=parse_tier(record.get("tier", 1)),
                start=_cell_text(record.get("start")),
                end=_cell_text(record.get("end")),
                is_moderator=parse_flag(record.get("ismoderator")),
            )
        )
    return members


def parse_workbook(data: bytes) -> list[Member]:
    """
    Read members from the first worksheet.

    The first row holds the headers; every following row becomes a member.
    """
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except _WORKBOOK_ERRORS as e:
        raise MemberImportError(IMPORT_FAILED_MESSAGE) from e

    try:
        return _sheet_members(wb.worksheets[0])
    except _WORKBOOK_ERRORS as e:
        raise MemberImportError(IMPORT_FAILED_MESSAGE) from e
    finally:
        wb.close()


# --- CSV ---


def parse_csv(text: str) -> list[Member]:
    """
    Read members from comma separated text.

    Quoted fields may contain commas. Rows without a username or an end
    date are dropped.
    """
    rows = [
        [cell.strip() for cell in row]
        for row in csv.reader(io.StringIO(text))
        if any(cell.strip() for cell in row)
    ]
    if not rows:
        return []

    header = [h.lower() for h in rows.pop(0)]

    def index_of(name: str) -> int | None:
        return header.index(name) if name in header else None

    ix = {
        "username": index_of("username"),
        "tier": index_of("tier"),
        "start": index_of("start"),
        "end": index_of("end"),
        "mod": index_of("ismoderator"),
    }

    members: list[Member] = []
    for cols in rows:

        def col(key: str) -> str | None:
            i = ix[key]
            if i is None or i >= len(cols):
                return None
            return cols[i]

        username = col("username") or ""
        end = col("end") or ""
        if not username or not end:
            continue

        tier_raw = col("tier")
        members.append(
            Member(
                username=username,
                tier=parse_tier(tier_raw if tier_raw is not None else 1),
                start=col("start") or "",
                end=end,
                is_moderator=parse_flag(col("mod")),
            )
        )
    return members


def parse_members(filename: str, data: bytes, content_type: str | None = None) -> list[Member]:
    """
    Turn an uploaded file into members.

    Raises:
        MemberImportError: unreadable file, legacy Excel format or no usable rows
    """
    if _LEGACY_EXCEL_RE.search(filename or ""):
        raise MemberImportError(LEGACY_EXCEL_MESSAGE, code="unsupported_type")

    if is_spreadsheet(filename, content_type):
        members = parse_workbook(data)
    else:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MemberImportError(IMPORT_FAILED_MESSAGE) from e
        try:
            members = parse_csv(text)
        except csv.Error as e:
            raise MemberImportError(IMPORT_FAILED_MESSAGE) from e

    if not members:
        raise MemberImportError(NO_ROWS_MESSAGE, code="no_rows")
    return members
