"""
Importer component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from moddash.domain.entities import Member


class MemberSinkPort(Protocol):
    """Destination for an imported member list."""

    def replace_all(self, members: list[Member]) -> int:
        """Replace every stored member. Returns the number written."""
        ...


class ImportRulesPort(Protocol):
    max_upload_bytes: int
    allowed_extensions: list[str]
