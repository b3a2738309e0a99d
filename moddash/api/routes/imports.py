from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from moddash.adapters.json_store import JsonFileMemberStore
from moddash.adapters.sqlite.repos import SQLiteMemberRepo
from moddash.api.deps import get_member_store, get_mod_session, get_rules
from moddash.api.schemas import ImportResponse
from moddash.api.views import render_error
from moddash.components.importer import ImportInput, ImportOutput, run_import, run_parse
from moddash.domain.entities import ModSession
from moddash.rules.models import DashboardRules

router = APIRouter()


async def _read_upload(file: UploadFile, max_bytes: int) -> ImportInput:
    # One byte past the limit is enough for the size check to reject it
    data = await file.read(max_bytes + 1)
    return ImportInput(
        filename=file.filename or "",
        data=data,
        content_type=file.content_type,
    )


def _json_result(output: ImportOutput, include_members: bool = False) -> JSONResponse:
    response = ImportResponse.from_output(output, include_members)
    body = response.model_dump(mode="json", by_alias=True)
    code = status.HTTP_200_OK if output.success else status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=code, content=body)


@router.post("/mod/import", response_model=None)
async def import_form(
    file: UploadFile = File(...),
    _session: ModSession = Depends(get_mod_session),
    store: SQLiteMemberRepo | JsonFileMemberStore = Depends(get_member_store),
    rules: DashboardRules = Depends(get_rules),
) -> HTMLResponse | RedirectResponse:
    """Dashboard upload form: replace the stored members and go back to /mod."""
    inp = await _read_upload(file, rules.imports.max_upload_bytes)
    output = run_import(inp, store, rules.imports)
    if not output.success:
        return HTMLResponse(
            render_error("Import failed", output.error or ""),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse(url="/mod", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/api/mod/import")
async def import_members(
    file: UploadFile = File(...),
    _session: ModSession = Depends(get_mod_session),
    store: SQLiteMemberRepo | JsonFileMemberStore = Depends(get_member_store),
    rules: DashboardRules = Depends(get_rules),
) -> JSONResponse:
    inp = await _read_upload(file, rules.imports.max_upload_bytes)
    output = run_import(inp, store, rules.imports)
    return _json_result(output)


@router.post("/api/mod/import/preview")
async def preview_import(
    file: UploadFile = File(...),
    _session: ModSession = Depends(get_mod_session),
    rules: DashboardRules = Depends(get_rules),
) -> JSONResponse:
    """Parse an upload and echo the members without storing them."""
    inp = await _read_upload(file, rules.imports.max_upload_bytes)
    output = run_parse(inp, rules.imports)
    return _json_result(output, include_members=True)
