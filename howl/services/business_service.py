"""
Howl Backend — Business Service
=================================

What:  Business listing, CRUD, and the detail view that folds in a business's
       reviews and photos.
Who:   Called by the /businesses route handlers.

List Flow (GET /businesses?page=N):
    ┌────────────┐    ┌─────────────┐    ┌──────────────────────────┐
    │ COUNT(*)   │───▶│  paginate() │───▶│ SELECT ... ORDER BY id   │
    │            │    │  clamp page │    │ LIMIT size OFFSET offset │
    └────────────┘    └─────────────┘    └──────────────────────────┘

Detail Flow (GET /businesses/{id}):
    business row → reviews WHERE businessid = id → photos WHERE businessid = id
    → shallow merge; the business's own columns win on a key collision.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from howl.config import settings
from howl.exceptions import StorageError
from howl.models.business import BUSINESS_SCHEMA, Business
from howl.pagination import paginate
from howl.schemas.business import BusinessListResponse
from howl.services.photo_service import PhotoService, photo_service
from howl.services.record_service import RecordService
from howl.services.review_service import ReviewService, review_service

logger = logging.getLogger(__name__)


class BusinessService(RecordService):
    """
    Business operations on top of the shared record CRUD.

    Responsibilities:
        - list_page(): one pagination pass, one bounded fetch
        - get_with_related(): business + reviews + photos
        - create/replace/delete: inherited from RecordService
    """

    model = Business
    schema = BUSINESS_SCHEMA
    collection_path = "/businesses"

    def __init__(
        self,
        reviews: Optional[ReviewService] = None,
        photos: Optional[PhotoService] = None,
        page_size: Optional[int] = None,
    ):
        self.reviews = reviews or review_service
        self.photos = photos or photo_service
        self.page_size = page_size or settings.page_size

    async def list_page(self, db: AsyncSession, page: Any = 1) -> BusinessListResponse:
        """
        Return one page of businesses ordered by id.

        Args:
            db: Async database session
            page: Raw `page` query value; clamped by paginate()

        Raises:
            StorageError: count or fetch failed (→ 500)
        """
        try:
            count_result = await db.execute(select(func.count(Business.id)))
            total_count = count_result.scalar() or 0

            window = paginate(
                total_count,
                page,
                page_size=self.page_size,
                base_path=self.collection_path,
            )

            result = await db.execute(
                select(Business)
                .order_by(Business.id.asc())
                .offset(window.offset)
                .limit(window.limit)
            )
            businesses = [business.to_dict() for business in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing businesses: %s", str(e), exc_info=True)
            raise StorageError(
                message="Error fetching businesses list. Try again later.",
                context={"error_type": type(e).__name__, "page": page},
            ) from e

        return BusinessListResponse(
            businesses=businesses,
            page_number=window.page,
            total_pages=window.last_page,
            page_size=window.page_size,
            total_count=window.total_count,
            links=window.links,
        )

    async def get_with_related(self, db: AsyncSession, businessid: int) -> Dict[str, Any]:
        """
        Business detail including its reviews and photos.

        Raises:
            NotFoundError: no business with this id
            StorageError: any of the three queries failed
        """
        business = await self.get(db, businessid)
        detail: Dict[str, Any] = {
            "reviews": await self.reviews.list_for_business(db, businessid),
            "photos": await self.photos.list_for_business(db, businessid),
        }
        detail.update(business.to_dict())
        return detail


business_service = BusinessService()
