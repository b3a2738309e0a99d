import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from moddash.adapters.auth.crypto import JWTAuthAdapter
from moddash.adapters.clock import SystemClock
from moddash.api.deps import (
    Settings,
    get_auth_adapter,
    get_clock,
    get_mod_session,
    get_rate_limiter,
    get_rules,
    get_settings,
)
from moddash.api.schemas import SessionResponse
from moddash.api.views import render_login
from moddash.app_shell.rate_limit import RateLimiter
from moddash.components.auth import LoginInput, run_login
from moddash.domain.entities import ModSession
from moddash.rules.models import DashboardRules

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_NEXT = "/mod"
TOO_MANY_ATTEMPTS_ERROR = "Too many login attempts. Try again in a minute."


def safe_next(next_path: str | None) -> str:
    """Only same-site dashboard paths are allowed as a post-login target."""
    if not next_path:
        return DEFAULT_NEXT
    if next_path.startswith("//") or "\\" in next_path:
        return DEFAULT_NEXT
    if next_path != "/mod" and not next_path.startswith(("/mod/", "/mod?")):
        return DEFAULT_NEXT
    return next_path


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.get("/mod/login", response_class=HTMLResponse)
def login_page(next: str | None = None) -> HTMLResponse:
    return HTMLResponse(render_login(next_path=safe_next(next)))


@router.post("/mod/login", response_model=None)
def login(
    request: Request,
    password: str = Form(""),
    next: str = Form(DEFAULT_NEXT),
    settings: Settings = Depends(get_settings),
    rules: DashboardRules = Depends(get_rules),
    auth_adapter: JWTAuthAdapter = Depends(get_auth_adapter),
    clock: SystemClock = Depends(get_clock),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> HTMLResponse | RedirectResponse:
    """Check the shared moderator password and set the session cookie."""
    target = safe_next(next)
    client = _client_key(request)

    if not limiter.allow_login(client):
        logger.warning(f"Login rate limit hit: client={client}")
        return HTMLResponse(
            render_login(TOO_MANY_ATTEMPTS_ERROR, target),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    result = run_login(LoginInput(password=password), settings, auth_adapter, clock)

    if not result.success:
        if result.config_error:
            logger.error(f"Login unavailable: {result.error}")
            code = status.HTTP_503_SERVICE_UNAVAILABLE
        else:
            logger.info(f"Login failed: client={client}")
            code = status.HTTP_401_UNAUTHORIZED
        return HTMLResponse(render_login(result.error, target), status_code=code)

    logger.info(f"Login succeeded: client={client}")
    resp = RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)
    resp.set_cookie(
        key=rules.auth.cookie_name,
        value=result.token_raw or "",
        httponly=True,
        max_age=settings.auth_ttl_seconds,
        samesite=rules.auth.same_site,
        secure=settings.cookie_secure,
        path="/",
    )
    return resp


@router.post("/mod/logout")
def logout(rules: DashboardRules = Depends(get_rules)) -> RedirectResponse:
    """Log out by clearing the session cookie."""
    resp = RedirectResponse(url=rules.auth.login_path, status_code=status.HTTP_303_SEE_OTHER)
    resp.delete_cookie(key=rules.auth.cookie_name, path="/")
    return resp


@router.get("/api/mod/session", response_model=SessionResponse, response_model_by_alias=True)
def read_session(session: ModSession = Depends(get_mod_session)) -> SessionResponse:
    return SessionResponse(
        role=session.role,
        issued_at=session.issued_at,
        expires_at=session.expires_at,
    )
