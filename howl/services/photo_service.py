"""Photo metadata persistence: CRUD plus the per-business listing."""

from howl.models.photo import PHOTO_SCHEMA, Photo
from howl.services.record_service import BusinessChildService


class PhotoService(BusinessChildService):
    model = Photo
    schema = PHOTO_SCHEMA
    collection_path = "/photos"


photo_service = PhotoService()
