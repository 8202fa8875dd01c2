"""Health check and redirect routes.

The redirect handler matches any single path segment, so this router is
included after every internal route.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from tinylink import __version__
from tinylink.common.validators import is_reserved
from tinylink.errors import NotFoundError
from ..api.schemas import HealthResponse, ErrorResponse

router = APIRouter()


@router.get(
    "/healthz",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness probe for load balancers and monitors.",
)
async def healthz():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=__version__)


@router.get(
    "/{code}",
    responses={
        302: {"description": "Redirect to the target URL"},
        404: {"model": ErrorResponse, "description": "Code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    include_in_schema=False,
)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the target URL, counting the click first."""
    if is_reserved(code):
        raise NotFoundError()

    service = request.app.state.service

    url = await service.resolve_redirect(code)

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
