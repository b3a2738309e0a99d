"""
Importer component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from moddash.domain.entities import Member

NO_ROWS_MESSAGE = "No rows found. Headers: username,tier,start,end[,isModerator]"
IMPORT_FAILED_MESSAGE = "Import failed. Make sure your file has the correct headers."
LEGACY_EXCEL_MESSAGE = "Legacy Excel files (.xls, .xlsb) are not supported. Save as .xlsx or .csv."


class MemberImportError(Exception):
    """Raised when an uploaded file cannot be turned into members."""

    def __init__(self, message: str, code: str = "import_failed") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class ImportInput:
    """An uploaded member file."""

    filename: str
    data: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class ImportOutput:
    members: tuple[Member, ...] = ()
    success: bool = False
    error: str | None = None
    error_code: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.members)
