"""
Route guard for the moderator area.

Everything under the protected prefixes needs a valid `mod_auth` cookie,
except the public paths (login page, favicon). Pages redirect to the login
form with a `next` parameter; API calls get a 401.
"""

from collections.abc import Awaitable, Callable
from urllib.parse import urlencode

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from moddash.adapters.auth.crypto import JWTAuthAdapter
from moddash.api.deps import get_settings, load_rules_cached, resolve_override
from moddash.components.auth import VerifySessionInput, run_verify_session
from moddash.rules.models import AuthRules


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_protected(path: str, rules: AuthRules) -> bool:
    if path in rules.public_paths:
        return False
    return any(_under(path, prefix) for prefix in rules.protected_prefixes)


def is_api_path(path: str) -> bool:
    return _under(path, "/api")


async def mod_auth_guard(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    settings = resolve_override(request.app, get_settings)
    rules = load_rules_cached(settings.rules_path).auth
    path = request.url.path

    if not is_protected(path, rules):
        return await call_next(request)

    token = request.cookies.get(rules.cookie_name)
    result = run_verify_session(
        VerifySessionInput(token=token),
        config=settings,
        auth_adapter=JWTAuthAdapter(settings.auth_secret),
    )
    if result.success:
        request.state.mod_session = result.session
        return await call_next(request)

    if is_api_path(path):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Not authenticated"},
        )

    url = f"{rules.login_path}?{urlencode({'next': path})}"
    return RedirectResponse(url=url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
