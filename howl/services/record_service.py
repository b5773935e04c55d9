"""
Howl Backend — Record Service Base
====================================

What:  Create / read / replace / delete for one table, driven by a RecordSchema.
Why:   Businesses, reviews and photos follow the same write rules: validate the
       body against the schema, drop unknown fields, persist, answer with a
       link. Each concrete service only adds what is specific to it.
How:   Subclasses set `model`, `schema` and `collection_path`. Every method
       receives the request's AsyncSession; nothing is stored on the instance
       between calls.

Error Handling Strategy:
    - Missing record       → NotFoundError (404 fallback responder)
    - Invalid body         → ValidationError (400, lists missing or mistyped fields)
    - DataError on write   → ValidationError (400, the database refused a value)
    - SQLAlchemyError      → StorageError (500, original error logged only)
    Application exceptions raised inside a storage block pass through untouched.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import DataError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from howl.exceptions import NotFoundError, StorageError, ValidationError
from howl.validation import RecordSchema, extract_fields, validate

logger = logging.getLogger(__name__)


class RecordService:
    """
    Base CRUD service for a table with an integer `id` primary key.

    Transactions:
        Writes are flushed, not committed. `get_db_session` commits when the
        route returns and rolls back if anything raised.
    """

    model: type
    schema: RecordSchema
    collection_path: str

    @property
    def resource(self) -> str:
        return self.schema.name

    def link(self, record_id: int) -> str:
        return f"{self.collection_path}/{record_id}"

    def links_for(self, record) -> Dict[str, str]:
        """Links returned after a create or replace."""
        return {self.resource: self.link(record.id)}

    def _storage_error(self, action: str, error: Exception, **context: Any) -> StorageError:
        logger.error(
            "Database error during %s %s: %s",
            action,
            self.resource,
            str(error),
            exc_info=True,
        )
        return StorageError(
            message=f"Could not {action} the {self.resource}. Please try again later.",
            context={"error_type": type(error).__name__, **context},
        )

    def validated_fields(self, body: Any) -> Dict[str, Any]:
        """
        Validate `body` against the schema and return only its known fields.

        Raises:
            ValidationError: a required field is missing or empty, or a known
                field holds a value of the wrong type
        """
        if not validate(body, self.schema):
            missing = self.schema.missing_fields(body)
            logger.info("Rejected %s body, missing fields: %s", self.resource, missing)
            raise ValidationError(
                message=self.schema.invalid_message,
                context={"missing": missing},
            )
        invalid = self.schema.invalid_fields(body)
        if invalid:
            logger.info("Rejected %s body, mistyped fields: %s", self.resource, invalid)
            raise ValidationError(
                message=self.schema.invalid_message,
                context={"invalid": invalid},
            )
        return extract_fields(body, self.schema)

    def _rejected_value(self, error: DataError) -> ValidationError:
        logger.info("Database rejected %s value: %s", self.resource, str(error.orig))
        return ValidationError(
            message=self.schema.invalid_message,
            context={"invalid_value": str(error.orig)},
        )

    async def get(self, db: AsyncSession, record_id: int):
        """
        Fetch one record by id.

        Raises:
            NotFoundError: no row with this id
            StorageError: query failed
        """
        try:
            result = await db.execute(select(self.model).where(self.model.id == record_id))
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._storage_error("fetch", e, record_id=record_id) from e

        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=record_id)
        return record

    async def create(self, db: AsyncSession, body: Any):
        """Validate, strip unknown fields, insert. Returns the row with its new id."""
        fields = self.validated_fields(body)
        record = self.model(**fields)
        try:
            db.add(record)
            await db.flush()
        except DataError as e:
            raise self._rejected_value(e) from e
        except SQLAlchemyError as e:
            raise self._storage_error("create", e) from e

        logger.info("Created %s %s", self.resource, record.id)
        return record

    async def replace(self, db: AsyncSession, record_id: int, body: Any):
        """
        Overwrite every schema field of an existing record.

        The record must exist before the body is looked at, so an unknown id
        is a 404 even when the body is also invalid. Optional fields absent
        from the body are cleared. The id never changes.
        """
        record = await self.get(db, record_id)
        fields = self.validated_fields(body)
        self.check_replacement(record, fields)

        for key in self.schema:
            setattr(record, key, fields.get(key))
        try:
            await db.flush()
        except DataError as e:
            raise self._rejected_value(e) from e
        except SQLAlchemyError as e:
            raise self._storage_error("update", e, record_id=record_id) from e

        logger.info("Replaced %s %s", self.resource, record_id)
        return record

    def check_replacement(self, record, fields: Dict[str, Any]) -> None:
        """Hook for resource-specific replace rules. Raise ValidationError to reject."""

    async def delete(self, db: AsyncSession, record_id: int) -> None:
        record = await self.get(db, record_id)
        try:
            await db.delete(record)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("delete", e, record_id=record_id) from e

        logger.info("Deleted %s %s", self.resource, record_id)


class BusinessChildService(RecordService):
    """
    Records that belong to a business through a `businessid` column.

    Adds the foreign-key filter used by the business detail endpoint and
    pins a record to its business on replace.
    """

    business_path = "/businesses"

    def links_for(self, record) -> Dict[str, str]:
        return {
            self.resource: self.link(record.id),
            "business": f"{self.business_path}/{record.businessid}",
        }

    def check_replacement(self, record, fields: Dict[str, Any]) -> None:
        if fields.get("businessid") != record.businessid:
            raise ValidationError(
                message=f"Updated {self.resource} must have the same businessid",
                field="businessid",
            )

    async def list_for_business(self, db: AsyncSession, businessid: int) -> List[Dict[str, Any]]:
        """All records whose businessid matches, ordered by id."""
        try:
            result = await db.execute(
                select(self.model)
                .where(self.model.businessid == businessid)
                .order_by(self.model.id.asc())
            )
            return [record.to_dict() for record in result.scalars().all()]
        except SQLAlchemyError as e:
            raise self._storage_error("list", e, businessid=businessid) from e
