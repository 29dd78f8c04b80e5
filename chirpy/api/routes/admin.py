from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, JSONResponse

from chirpy.adapters.sqlite.repos import SQLiteUserRepo
from chirpy.api.deps import get_hit_counter, get_settings, get_user_repo
from chirpy.app_shell.config import Settings
from chirpy.app_shell.hit_counter import HitCounter
from chirpy.components.admin import ResetInput, run_metrics, run_reset

router = APIRouter()

METRICS_TEMPLATE = """
<html>
    <body>
        <h1>Welcome, Chirpy Admin</h1>
        <p>Chirpy has been visited {hits} times!</p>
    </body>
</html>"""


@router.get("/metrics", response_class=HTMLResponse)
def metrics(counter: HitCounter = Depends(get_hit_counter)) -> HTMLResponse:
    result = run_metrics(counter)
    return HTMLResponse(METRICS_TEMPLATE.format(hits=result.hits))


@router.post("/reset")
def reset(
    settings: Settings = Depends(get_settings),
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    counter: HitCounter = Depends(get_hit_counter),
) -> JSONResponse:
    """Dev-only: delete all users and chirps and zero the visit counter."""
    result = run_reset(ResetInput(platform=settings.platform), user_repo, counter)
    if not result.success:
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": result.error})
    return JSONResponse(status_code=status.HTTP_200_OK, content={"users_deleted": result.users_deleted})
