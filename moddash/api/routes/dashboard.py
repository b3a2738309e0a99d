"""
Dashboard routes - HTML dashboard and the JSON stats/members/role-mapping API.

The summary is recomputed from the member source on every request.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from moddash.adapters.clock import SystemClock
from moddash.adapters.discord_stub import DiscordActionsStub
from moddash.api.deps import (
    get_clock,
    get_discord_actions,
    get_member_source,
    get_mod_session,
    get_role_mappings,
    get_rules,
)
from moddash.api.schemas import MemberResponse, RoleMappingResponse, StatsResponse
from moddash.api.views import DashboardView, render_dashboard
from moddash.components.status import ClassifyInput, MemberSourcePort, run_classify, run_label
from moddash.domain.entities import ModSession, RoleMapping
from moddash.rules.models import DashboardRules

router = APIRouter()


@router.get("/mod", response_class=HTMLResponse)
def dashboard_page(
    notice: str | None = None,
    _session: ModSession = Depends(get_mod_session),
    member_source: MemberSourcePort = Depends(get_member_source),
    role_mappings: list[RoleMapping] = Depends(get_role_mappings),
    discord: DiscordActionsStub = Depends(get_discord_actions),
    clock: SystemClock = Depends(get_clock),
    rules: DashboardRules = Depends(get_rules),
) -> HTMLResponse:
    result = run_classify(ClassifyInput(), member_source, clock, rules.status)
    view = DashboardView(
        summary=result.summary,
        role_mappings=role_mappings,
        statuses=run_label(result.summary.moderators, result, rules.status),
        role_mismatches=discord.list_role_mismatches(list(result.members), role_mappings),
        generated_at=result.now,
        notice=notice,
    )
    return HTMLResponse(render_dashboard(view))


@router.get("/api/mod/stats", response_model=StatsResponse, response_model_by_alias=True)
def read_stats(
    _session: ModSession = Depends(get_mod_session),
    member_source: MemberSourcePort = Depends(get_member_source),
    clock: SystemClock = Depends(get_clock),
    rules: DashboardRules = Depends(get_rules),
) -> StatsResponse:
    result = run_classify(ClassifyInput(), member_source, clock, rules.status)
    return StatsResponse.from_summary(result.summary)


@router.get(
    "/api/mod/members", response_model=list[MemberResponse], response_model_by_alias=True
)
def list_members(
    _session: ModSession = Depends(get_mod_session),
    member_source: MemberSourcePort = Depends(get_member_source),
    clock: SystemClock = Depends(get_clock),
    rules: DashboardRules = Depends(get_rules),
) -> list[MemberResponse]:
    result = run_classify(ClassifyInput(), member_source, clock, rules.status)
    labels = run_label(result.members, result, rules.status)
    return [
        MemberResponse.from_member(m, label)
        for m, label in zip(result.members, labels, strict=True)
    ]


@router.get(
    "/api/mod/role-mappings",
    response_model=list[RoleMappingResponse],
    response_model_by_alias=True,
)
def list_role_mappings(
    _session: ModSession = Depends(get_mod_session),
    role_mappings: list[RoleMapping] = Depends(get_role_mappings),
) -> list[RoleMappingResponse]:
    return [RoleMappingResponse.from_mapping(r) for r in role_mappings]
