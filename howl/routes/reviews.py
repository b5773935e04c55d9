"""
Howl Backend — Review Route Handlers
======================================

Endpoints:
    POST   /reviews              create → 201
    GET    /reviews/{reviewid}   fetch one
    PUT    /reviews/{reviewid}   full replace (businessid may not change)
    DELETE /reviews/{reviewid}   delete → 204

Reviews are listed per business by GET /businesses/{businessid}.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from howl.database import get_db_session
from howl.routes.params import record_id
from howl.schemas.common import CreatedResponse, ErrorResponse, LinksResponse
from howl.services.review_service import review_service

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"description": "Invalid review", "model": ErrorResponse}},
    summary="Create a review",
)
async def create_review(
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    review = await review_service.create(db, body)
    return CreatedResponse(id=review.id, links=review_service.links_for(review))


@router.get(
    "/{reviewid}",
    responses={404: {"description": "Review not found", "model": ErrorResponse}},
    summary="Get a review",
)
async def get_review(
    reviewid: int = record_id("Review id"),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    review = await review_service.get(db, reviewid)
    return review.to_dict()


@router.put(
    "/{reviewid}",
    response_model=LinksResponse,
    responses={
        400: {"description": "Invalid review", "model": ErrorResponse},
        404: {"description": "Review not found", "model": ErrorResponse},
    },
    summary="Replace a review",
)
async def replace_review(
    reviewid: int = record_id("Review id"),
    body: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> LinksResponse:
    review = await review_service.replace(db, reviewid, body)
    return LinksResponse(links=review_service.links_for(review))


@router.delete(
    "/{reviewid}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Review not found", "model": ErrorResponse}},
    summary="Delete a review",
)
async def delete_review(
    reviewid: int = record_id("Review id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await review_service.delete(db, reviewid)
    return Response(status_code=204)
