"""JSON file member store.

Keeps the most recently imported member list on disk, for deployments
that run without the SQLite store. Implements both MemberSourcePort and
MemberSinkPort.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from moddash.domain.entities import Member, timestamp_to_iso

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class JsonFileMemberStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def list_members(self) -> list[Member]:
        """Stored members, or an empty list if the file is missing or unreadable."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable member store {self.path}: {e}")
            return []

        records = raw.get("members", []) if isinstance(raw, dict) else raw
        members: list[Member] = []
        for record in records:
            try:
                members.append(self._from_record(record))
            except (ValidationError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed member record in {self.path}: {e}")
        return members

    def replace_all(self, members: list[Member]) -> int:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "version": STORE_VERSION,
            "members": [self._to_record(m) for m in members],
        }

        # Write to a sibling temp file, then swap it in
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return len(members)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    @staticmethod
    def _to_record(member: Member) -> dict[str, Any]:
        return {
            "username": member.username,
            "tier": member.tier,
            "start": timestamp_to_iso(member.start),
            "end": timestamp_to_iso(member.end),
            "isModerator": member.is_moderator,
        }

    @staticmethod
    def _from_record(record: dict[str, Any]) -> Member:
        return Member(
            username=str(record.get("username", "")),
            tier=record.get("tier", 1),
            start=record.get("start") or None,
            end=record.get("end") or None,
            is_moderator=bool(record.get("isModerator", False)),
        )
