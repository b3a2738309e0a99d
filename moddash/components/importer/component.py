"""
Importer component - Member spreadsheet import.

Shell Layer - validates the upload, parses it and writes it to the sink,
converting MemberImportError into an ImportOutput.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from ._impl import parse_members
from .models import ImportInput, ImportOutput, MemberImportError
from .ports import ImportRulesPort, MemberSinkPort

logger = logging.getLogger(__name__)


def validate_upload(inp: ImportInput, rules: ImportRulesPort | None) -> None:
    """Raise MemberImportError when the upload breaks the import rules."""
    if not inp.data:
        raise MemberImportError("Empty file", code="empty_file")
    if rules is None:
        return

    if len(inp.data) > rules.max_upload_bytes:
        limit_kb = rules.max_upload_bytes // 1024
        raise MemberImportError(
            f"File too large. Maximum size is {limit_kb}KB", code="file_too_large"
        )

    suffix = PurePath(inp.filename or "").suffix.lower()
    allowed = [ext.lower() for ext in rules.allowed_extensions]
    if suffix not in allowed:
        raise MemberImportError(
            f"Unsupported file type. Use one of: {', '.join(allowed)}",
            code="unsupported_type",
        )


def run_parse(inp: ImportInput, rules: ImportRulesPort | None = None) -> ImportOutput:
    """Parse without storing (preview)."""
    try:
        validate_upload(inp, rules)
        members = parse_members(inp.filename, inp.data, inp.content_type)
    except MemberImportError as e:
        logger.warning(f"Member import rejected: file={inp.filename!r}, reason={e.code}")
        return ImportOutput(success=False, error=e.message, error_code=e.code)

    warnings = [
        f"{m.username or '(blank)'}: end date missing" for m in members if not m.end
    ]
    return ImportOutput(members=tuple(members), success=True, warnings=warnings)


def run_import(
    inp: ImportInput,
    sink: MemberSinkPort,
    rules: ImportRulesPort | None = None,
) -> ImportOutput:
    parsed = run_parse(inp, rules)
    if not parsed.success:
        return parsed

    written = sink.replace_all(list(parsed.members))
    logger.info(f"Imported {written} members from {inp.filename!r}")
    return parsed


def run(
    inp: ImportInput,
    *,
    sink: MemberSinkPort | None = None,
    rules: ImportRulesPort | None = None,
) -> ImportOutput:
    if sink is None:
        return run_parse(inp, rules)
    return run_import(inp, sink, rules)
