"""Review persistence: CRUD plus the per-business listing."""

from howl.models.review import REVIEW_SCHEMA, Review
from howl.services.record_service import BusinessChildService


class ReviewService(BusinessChildService):
    model = Review
    schema = REVIEW_SCHEMA
    collection_path = "/reviews"


review_service = ReviewService()
