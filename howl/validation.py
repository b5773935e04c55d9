"""
Howl Backend — Record Schema Validation
=========================================

What:  Field-requirement tables for submitted records, plus the two pure
       operations every write path uses: `validate` and `extract_fields`.
Why:   Request bodies are free-form JSON. The route accepts whatever the client
       sends; this module decides whether it is a valid record and strips
       anything the table does not know about before it reaches the database.
How:   A `RecordSchema` is a static mapping of field name → required flag.
       Binding a schema to an ORM model checks every field name against the
       model's columns when the module is imported, so a typo in a schema
       fails at startup instead of silently dropping data.

Presence rule:
    A required field passes when it is present and its value is neither
    None nor an empty string. 0 and False are values, not absences.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional


class RecordSchema(Mapping[str, bool]):
    """
    Immutable field name → required flag table.

    Behaves as a read-only mapping so callers can iterate it like the plain
    dict it replaces.

    Example:
        BUSINESS_SCHEMA = RecordSchema(
            "business",
            {"ownerid": True, "name": True, "website": False},
            model=Business,
        )
    """

    def __init__(self, name: str, fields: Mapping[str, bool], model: Optional[type] = None):
        self.name = name
        self._fields: Dict[str, bool] = {key: bool(required) for key, required in fields.items()}
        self._types: Dict[str, type] = {}
        if model is not None:
            self._check_against_model(model)

    def _check_against_model(self, model: type) -> None:
        columns = model.__table__.columns
        unknown = sorted(set(self._fields) - set(columns.keys()))
        if unknown:
            raise ValueError(
                f"{self.name} schema names fields with no column on "
                f"{model.__name__}: {', '.join(unknown)}"
            )
        self._types = {key: columns[key].type.python_type for key in self._fields}

    def __getitem__(self, key: str) -> bool:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def required_fields(self) -> List[str]:
        return [key for key, required in self._fields.items() if required]

    @property
    def invalid_message(self) -> str:
        """Client-facing 400 message for this record type."""
        return f"Request body is not a valid {self.name} object"

    def missing_fields(self, record: Any) -> List[str]:
        """Required fields that `record` does not supply, in schema order."""
        if not isinstance(record, Mapping):
            return self.required_fields
        return [key for key in self.required_fields if not _has_value(record, key)]

    def invalid_fields(self, record: Any) -> List[str]:
        """
        Known fields whose value cannot be stored as given, in schema order.

        Objects and arrays never fit a column. With a bound model, a scalar
        must also already be the column's type: str for text, int for
        integers, int or float for floats, and booleans only where the column
        is boolean. Nothing is converted. None is left to the presence rule.
        """
        if not isinstance(record, Mapping):
            return []
        return [
            key for key in self._fields
            if key in record and not self._fits(key, record[key])
        ]

    def _fits(self, key: str, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, (Mapping, list, tuple)):
            return False
        expected = self._types.get(key)
        if expected is None:
            return True
        if isinstance(value, bool):
            return expected is bool
        if expected is float:
            return isinstance(value, (int, float))
        return isinstance(value, expected)


def _has_value(record: Mapping, key: str) -> bool:
    value = record.get(key)
    return value is not None and value != ""


def validate(record: Any, schema: RecordSchema) -> bool:
    """True iff every required field in `schema` has a value in `record`."""
    return not schema.missing_fields(record)


def extract_fields(record: Mapping[str, Any], schema: RecordSchema) -> Dict[str, Any]:
    """
    Copy only the keys `schema` knows about.

    Values are copied verbatim; nothing is coerced. The input is not modified.
    """
    return {key: record[key] for key in schema if key in record}
