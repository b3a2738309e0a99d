"""
Importer component - CSV / XLSX member uploads.
"""

from ._impl import (
    SPREADSHEET_EXTENSIONS,
    is_spreadsheet,
    parse_csv,
    parse_flag,
    parse_members,
    parse_tier,
    parse_workbook,
)
from .component import run, run_import, run_parse, validate_upload
from .models import (
    IMPORT_FAILED_MESSAGE,
    LEGACY_EXCEL_MESSAGE,
    NO_ROWS_MESSAGE,
    ImportInput,
    ImportOutput,
    MemberImportError,
)
from .ports import ImportRulesPort, MemberSinkPort

__all__ = [
    # Entry points
    "run",
    "run_import",
    "run_parse",
    "validate_upload",
    # Parsing
    "parse_members",
    "parse_csv",
    "parse_workbook",
    "parse_tier",
    "parse_flag",
    "is_spreadsheet",
    "SPREADSHEET_EXTENSIONS",
    # Models
    "ImportInput",
    "ImportOutput",
    "MemberImportError",
    "NO_ROWS_MESSAGE",
    "IMPORT_FAILED_MESSAGE",
    "LEGACY_EXCEL_MESSAGE",
    # Ports
    "ImportRulesPort",
    "MemberSinkPort",
]
