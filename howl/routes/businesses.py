"""
Howl Backend — Business Route Handlers
========================================

What:  /businesses collection and item endpoints.
How:   Each handler pulls the request's session, hands off to
       BusinessService, and picks the status code. Request bodies are taken
       as raw JSON so schema failures answer 400, not FastAPI's 422.

Endpoints:
    GET    /businesses?page=N         paginated list
    POST   /businesses                create → 201
    GET    /businesses/{businessid}   detail with reviews and photos
    PUT    /businesses/{businessid}   full replace
    DELETE /businesses/{businessid}   delete → 204

Unknown ids raise NotFoundError, answered by the shared 404 responder.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from howl.database import get_db_session
from howl.routes.params import record_id
from howl.schemas.business import BusinessListResponse
from howl.schemas.common import CreatedResponse, ErrorResponse, LinksResponse
from howl.services.business_service import business_service

router = APIRouter(prefix="/businesses", tags=["Businesses"])


@router.get(
    "",
    response_model=BusinessListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List businesses, ten per page",
)
async def list_businesses(
    page: Optional[str] = Query(
        default=None,
        description="Page number (default 1). Out-of-range values are clamped.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> BusinessListResponse:
    return await business_service.list_page(db, page)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"description": "Invalid business", "model": ErrorResponse}},
    summary="Create a business",
)
async def create_business(
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    business = await business_service.create(db, body)
    return CreatedResponse(id=business.id, links=business_service.links_for(business))


@router.get(
    "/{businessid}",
    responses={404: {"description": "Business not found", "model": ErrorResponse}},
    summary="Get a business with its reviews and photos",
)
async def get_business(
    businessid: int = record_id("Business id"),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await business_service.get_with_related(db, businessid)


@router.put(
    "/{businessid}",
    response_model=LinksResponse,
    responses={
        400: {"description": "Invalid business", "model": ErrorResponse},
        404: {"description": "Business not found", "model": ErrorResponse},
    },
    summary="Replace a business",
)
async def replace_business(
    businessid: int = record_id("Business id"),
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> LinksResponse:
    business = await business_service.replace(db, businessid, body)
    return LinksResponse(links=business_service.links_for(business))


@router.delete(
    "/{businessid}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Business not found", "model": ErrorResponse}},
    summary="Delete a business",
)
async def delete_business(
    businessid: int = record_id("Business id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await business_service.delete(db, businessid)
    return Response(status_code=204)
