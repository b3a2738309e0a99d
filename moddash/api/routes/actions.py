from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

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
from moddash.api.schemas import ActionResponse
from moddash.api.views import render_error
from moddash.components.actions import ActionInput, ActionOutput, parse_action, run_action
from moddash.components.status import MemberSourcePort
from moddash.domain.entities import ModSession, RoleMapping
from moddash.rules.models import DashboardRules

router = APIRouter()


def _perform(
    name: str,
    member_source: MemberSourcePort,
    role_mappings: list[RoleMapping],
    discord: DiscordActionsStub,
    clock: SystemClock,
    rules: DashboardRules,
) -> ActionOutput | None:
    action = parse_action(name)
    if action is None:
        return None
    return run_action(
        ActionInput(action=action),
        member_source,
        role_mappings,
        discord,
        clock,
        rules.status,
    )


@router.post("/api/mod/actions/{action}")
def trigger_action(
    action: str,
    _session: ModSession = Depends(get_mod_session),
    member_source: MemberSourcePort = Depends(get_member_source),
    role_mappings: list[RoleMapping] = Depends(get_role_mappings),
    discord: DiscordActionsStub = Depends(get_discord_actions),
    clock: SystemClock = Depends(get_clock),
    rules: DashboardRules = Depends(get_rules),
) -> JSONResponse:
    """Run a dashboard action. Actions without a backend answer 501."""
    output = _perform(action, member_source, role_mappings, discord, clock, rules)
    if output is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown action")

    code = status.HTTP_200_OK if output.implemented else status.HTTP_501_NOT_IMPLEMENTED
    body = ActionResponse.from_output(output).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=code, content=body)


@router.post("/mod/actions/{action}", response_model=None)
def trigger_action_form(
    action: str,
    _session: ModSession = Depends(get_mod_session),
    member_source: MemberSourcePort = Depends(get_member_source),
    role_mappings: list[RoleMapping] = Depends(get_role_mappings),
    discord: DiscordActionsStub = Depends(get_discord_actions),
    clock: SystemClock = Depends(get_clock),
    rules: DashboardRules = Depends(get_rules),
) -> HTMLResponse | RedirectResponse:
    output = _perform(action, member_source, role_mappings, discord, clock, rules)
    if output is None:
        return HTMLResponse(
            render_error("Unknown action", f"No dashboard action named {action!r}."),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    url = f"/mod?{urlencode({'notice': output.message})}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)
