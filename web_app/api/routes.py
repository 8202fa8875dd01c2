"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Request, status

from .schemas import (
    CreateLinkRequest,
    LinkResponse,
    OkResponse,
    ErrorResponse,
)

router = APIRouter()


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or code"},
        409: {"model": ErrorResponse, "description": "Code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create link",
    description="Create a short link. Optionally provide a custom code.",
)
async def create_link(request: Request, body: CreateLinkRequest):
    """Create a short link."""
    service = request.app.state.service

    link = await service.create_link(
        url=body.url,
        code=body.code,
        serving_host=request.state.serving_host,
    )

    return LinkResponse.model_validate(link)


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="List links",
    description="List every link, most recently created first.",
)
async def list_links(request: Request):
    """List all links."""
    service = request.app.state.service

    links = await service.list_links()

    return [LinkResponse.model_validate(link) for link in links]


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get link",
    description="Get a link including its click statistics.",
)
async def get_link(request: Request, code: str):
    """Get one link."""
    service = request.app.state.service

    link = await service.get_link(code)

    return LinkResponse.model_validate(link)


@router.delete(
    "/links/{code}",
    response_model=OkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Code not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    """Delete a link."""
    service = request.app.state.service

    await service.delete_link(code)

    return OkResponse(ok=True)
