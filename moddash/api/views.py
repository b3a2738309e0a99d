"""
Server-rendered HTML for the moderator dashboard.

Pages: splash, login, dashboard and a plain error page. Everything is
plain HTML with inline styles; forms post back to the app so the dashboard
works without JavaScript.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from moddash.components.actions import ACTION_LABELS, DashboardAction
from moddash.components.status import StatusSummary, parse_timestamp
from moddash.domain.entities import Member, MemberStatus, RoleMapping, Timestamp

EMPTY_DATE = "—"
UPLOAD_ACCEPT = (
    ".csv, .xlsx, .xlsm, application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

STATUS_LABELS: dict[MemberStatus, str] = {
    "active": "Active",
    "expiring": "Expiring",
    "lapsed": "Lapsed",
    "unknown": "Unknown",
}

_STYLE = """
body { margin: 0; font-family: system-ui, sans-serif; background: #343a4a; color: #fff; }
header { display: flex; justify-content: space-between; align-items: center;
         padding: 1rem 2rem; border-bottom: 1px solid rgba(255,255,255,.1); }
main { max-width: 980px; margin: 0 auto; padding: 2rem 1rem; }
.panel { background: #c63b30; border-radius: 1.5rem; padding: 2rem;
         box-shadow: 0 18px 60px rgba(0,0,0,.35); }
.grid { display: grid; gap: 1.5rem; margin-bottom: 1.5rem; }
.grid-3 { grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); }
.grid-2 { grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); }
.card { background: rgba(255,255,255,.12); border: 1px solid rgba(255,255,255,.2);
        border-radius: 1rem; padding: 1.25rem; min-width: 0; }
.stat { font-size: 2.25rem; font-weight: 800; }
table { width: 100%; border-collapse: collapse; table-layout: fixed; }
th, td { text-align: left; padding: .5rem .75rem; overflow: hidden; text-overflow: ellipsis; }
th { border-bottom: 1px solid rgba(255,255,255,.4); }
tr:nth-child(even) td { background: rgba(255,255,255,.1); }
button { cursor: pointer; border-radius: 1rem; border: 1px solid rgba(255,255,255,.2);
         background: rgba(255,255,255,.15); color: #fff; padding: .6rem 1rem; font-weight: 600; }
.actions button { width: 100%; height: 5rem; }
.notice { background: rgba(0,0,0,.25); border-radius: .75rem; padding: .75rem 1rem;
          margin-bottom: 1.5rem; }
.error { color: #ffb4b4; }
.title { text-align: center; font-size: 4rem; color: #ff6b6b; margin: 5rem 0 2rem;
         text-shadow: 0 0 18px rgba(255,90,90,.6); }
.go { display: inline-block; padding: 1rem 3.5rem; font-size: 1.75rem; font-weight: 700;
      letter-spacing: .2em; background: #c63b30; color: #fff; border-radius: 1rem;
      text-decoration: none; }
"""


def _e(value: object) -> str:
    return html.escape(str(value), quote=True)


def fmt_date(value: Timestamp | None) -> str:
    """Format as 'Sep 02, 2025'; unparseable values render as an em dash."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return EMPTY_DATE
    return parsed.strftime("%b %d, %Y")


def render_page(title: str, body: str, *, header: str = "") -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{_e(title)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    {header}
    {body}
</body>
</html>"""


def render_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    head = "".join(f"<th>{_e(h)}</th>" for h in headers)
    if not rows:
        body = f'<tr><td colspan="{len(headers)}">No data</td></tr>'
    else:
        body = "".join(
            "<tr>" + "".join(f"<td>{_e(c)}</td>" for c in row) + "</tr>" for row in rows
        )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


# --- Splash / Login ---


def render_splash() -> str:
    body = """<main>
        <h1 class="title">Discord Mod Dashboard</h1>
        <p style="text-align:center">
            <a class="go" href="/mod/login" aria-label="Go to login">GO</a>
        </p>
    </main>"""
    return render_page("Discord Mod Dashboard", body)


def render_login(error: str | None = None, next_path: str = "/mod") -> str:
    error_html = f'<p class="error">{_e(error)}</p>' if error else ""
    body = f"""<main>
        <h1 class="title">Discord Mod Dashboard</h1>
        <form method="post" action="/mod/login" style="max-width:24rem;margin:0 auto">
            <input type="hidden" name="next" value="{_e(next_path)}" />
            <label for="password">Enter Password</label>
            <input id="password" name="password" type="password" required autofocus
                   style="width:100%;padding:.75rem;margin:.5rem 0 1rem;border-radius:1rem" />
            <p style="text-align:center"><button type="submit" class="go">GO</button></p>
            <p style="text-align:center;font-size:.8rem;opacity:.7">Authorized staff only.</p>
            {error_html}
            <p style="text-align:center">
                <a href="/" style="color:#fff;font-size:.8rem">Back to home</a>
            </p>
        </form>
    </main>"""
    return render_page("Mod Login", body)


def render_error(title: str, message: str) -> str:
    body = f"""<main><div class="panel">
        <h1>{_e(title)}</h1>
        <p class="error">{_e(message)}</p>
        <p><a href="/mod" style="color:#fff">Back to dashboard</a></p>
    </div></main>"""
    return render_page(title, body, header=_mod_header())


# --- Dashboard ---


@dataclass
class DashboardView:
    summary: StatusSummary
    role_mappings: list[RoleMapping]
    # Labels for summary.moderators, same order
    statuses: list[MemberStatus] = field(default_factory=list)
    role_mismatches: list[str] = field(default_factory=list)
    generated_at: datetime | None = None
    notice: str | None = None


def _mod_header() -> str:
    return """<header>
        <strong style="font-size:1.5rem">Mod Dashboard</strong>
        <form method="post" action="/mod/logout"><button type="submit">Log out</button></form>
    </header>"""


def _stat_card(label: str, value: int) -> str:
    return f"""<section class="card"><h3>{_e(label)}</h3>
        <div class="stat">{value:,}</div></section>"""


def _moderator_rows(view: DashboardView) -> list[list[str]]:
    rows = []
    for i, m in enumerate(view.summary.moderators):
        status = view.statuses[i] if i < len(view.statuses) else "unknown"
        rows.append([m.username, STATUS_LABELS[status], fmt_date(m.start)])
    return rows


def _expiring_rows(members: Sequence[Member]) -> list[list[str]]:
    return [[m.username, f"Tier {m.tier}", fmt_date(m.end)] for m in members]


def _mismatch_list(names: Sequence[str]) -> str:
    if not names:
        return "<ul><li>No mismatches</li></ul>"
    return "<ul>" + "".join(f"<li>{_e(n)}</li>" for n in names) + "</ul>"


def _action_buttons() -> str:
    buttons = []
    for action in DashboardAction:
        buttons.append(
            f'<form method="post" action="/mod/actions/{action.value}">'
            f'<button type="submit">{_e(ACTION_LABELS[action])}</button></form>'
        )
    return '<div class="grid grid-3 actions">' + "".join(buttons) + "</div>"


def render_dashboard(view: DashboardView) -> str:
    s = view.summary
    notice = f'<div class="notice">{_e(view.notice)}</div>' if view.notice else ""
    generated = (
        f'<p style="font-size:.8rem;opacity:.8">As of {_e(view.generated_at.isoformat())}</p>'
        if view.generated_at
        else ""
    )
    expiring_rows = _expiring_rows(s.expiring_soon)
    mapping_rows = [[r.plan, f"Tier {r.tier}", r.discord_role] for r in view.role_mappings]

    body = f"""<main><section class="panel">
        <h1>Mod Dashboard</h1>
        {notice}
        <div class="grid grid-3">
            {_stat_card("Active", s.active)}
            {_stat_card("Expiring", s.expiring)}
            {_stat_card("Lapsed", s.lapsed)}
        </div>
        <div class="card" style="margin-bottom:1.5rem">
            <form method="post" action="/mod/import" enctype="multipart/form-data">
                <h2 style="margin-top:0">Import</h2>
                <p>csv or xlsx</p>
                <input id="member-file" name="file" type="file"
                       accept="{_e(UPLOAD_ACCEPT)}" />
                <button type="submit">Upload</button>
            </form>
        </div>
        <div class="grid grid-2">
            <section class="card"><h2>Moderators Exempt</h2>
                {render_table(["Username", "Sub Status", "Mod Since"], _moderator_rows(view))}
            </section>
            <section class="card"><h2>Expiring Soon</h2>
                {render_table(["Username", "Tier", "Renewal Date"], expiring_rows)}
            </section>
        </div>
        <div class="grid grid-2">
            <section class="card"><h2>Role Mismatches</h2>
                <h4>Discord Role</h4>
                {_mismatch_list(view.role_mismatches)}
            </section>
            <section class="card"><h2>Settings</h2>
                {render_table(["Mapping", "Tier", "Discord Role"], mapping_rows)}
            </section>
        </div>
        {_action_buttons()}
        {generated}
    </section></main>"""
    return render_page("Mod Dashboard", body, header=_mod_header())
