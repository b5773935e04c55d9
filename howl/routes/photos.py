"""
Howl Backend — Photo Route Handlers
=====================================

Endpoints:
    POST   /photos             create → 201
    GET    /photos/{photoid}   fetch one
    PUT    /photos/{photoid}   full replace (businessid may not change)
    DELETE /photos/{photoid}   delete → 204
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from howl.database import get_db_session
from howl.routes.params import record_id
from howl.schemas.common import CreatedResponse, ErrorResponse, LinksResponse
from howl.services.photo_service import photo_service

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"description": "Invalid photo", "model": ErrorResponse}},
    summary="Create a photo",
)
async def create_photo(
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    photo = await photo_service.create(db, body)
    return CreatedResponse(id=photo.id, links=photo_service.links_for(photo))


@router.get(
    "/{photoid}",
    responses={404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Get a photo",
)
async def get_photo(
    photoid: int = record_id("Photo id"),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    photo = await photo_service.get(db, photoid)
    return photo.to_dict()


@router.put(
    "/{photoid}",
    response_model=LinksResponse,
    responses={
        400: {"description": "Invalid photo", "model": ErrorResponse},
        404: {"description": "Photo not found", "model": ErrorResponse},
    },
    summary="Replace a photo",
)
async def replace_photo(
    photoid: int = record_id("Photo id"),
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> LinksResponse:
    photo = await photo_service.replace(db, photoid, body)
    return LinksResponse(links=photo_service.links_for(photo))


@router.delete(
    "/{photoid}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Photo not found", "model": ErrorResponse}},
    summary="Delete a photo",
)
async def delete_photo(
    photoid: int = record_id("Photo id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await photo_service.delete(db, photoid)
    return Response(status_code=204)
