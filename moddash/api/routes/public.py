from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from moddash.api.views import render_splash

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def splash() -> HTMLResponse:
    return HTMLResponse(render_splash())
