import json
import sys

import pytest

from moddash.adapters.sqlite.repos import SQLiteMemberRepo, SQLiteRoleMappingRepo
from moddash.app_shell import cli


@pytest.fixture
def run_cli(settings, monkeypatch, capsys):
    """Run the CLI with argv and return its stdout."""

    def _run(*argv: str) -> str:
        monkeypatch.setattr(sys, "argv", ["moddash", *argv])
        cli.main()
        return capsys.readouterr().out

    return _run


def test_make_hash(run_cli):
    out = run_cli("make-hash", "hunter2").strip()
    assert out.startswith("$argon2")


def test_import_and_stats(run_cli, settings, tmp_path):
    members_csv = tmp_path / "members.csv"
    members_csv.write_text(
        "username,tier,start,end,isModerator\n"
        "zed,2,2025-01-01,2025-09-01,false\n"
        "yara,1,2025-01-01,2025-08-01,true\n"
    )

    out = run_cli("import", str(members_csv))

    assert "Imported 2 members." in out
    assert SQLiteMemberRepo(settings.db_path).count() == 2

    stats = json.loads(run_cli("stats", "--json", "--at", "2025-08-30"))
    assert (stats["active"], stats["expiring"], stats["lapsed"]) == (1, 1, 1)
    assert [m["username"] for m in stats["moderators"]] == ["yara"]


def test_stats_text_uses_demo_roster(run_cli):
    out = run_cli("stats", "--at", "2025-08-30")
    assert "Active:   6" in out
    assert "Expiring: 3" in out
    assert " - Shawn" in out


def test_import_missing_file(run_cli, tmp_path):
    with pytest.raises(SystemExit) as exc:
        run_cli("import", str(tmp_path / "nope.csv"))
    assert exc.value.code == 1


def test_import_bad_file(run_cli, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("username,end\n")
    with pytest.raises(SystemExit):
        run_cli("import", str(bad))


def test_seed_roles(run_cli, settings):
    out = run_cli("seed-roles")
    assert "Seeded 5 role mappings." in out

    out = run_cli("seed-roles")
    assert "already present" in out

    out = run_cli("seed-roles", "--force")
    assert "Seeded 5 role mappings." in out
    assert SQLiteRoleMappingRepo(settings.db_path).count() == 5


def test_stats_bad_date(run_cli):
    with pytest.raises(SystemExit):
        run_cli("stats", "--at", "last tuesday")
