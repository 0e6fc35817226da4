# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Full and detailed serialized forms of an error record.

The full form carries every persisted attribute and round-trips back into an
ErrorRecord. Request collections are written as ordered lists of
``{"name": ..., "value": ...}`` objects so that repeated names and their
order survive. ``id`` is assigned by stores and is not part of it.

The detailed form is a flattened, display-only projection for API
responses: timestamps become epoch seconds and each request collection
becomes a plain dictionary.
"""

import json
from datetime import datetime, timezone
from typing import Any

from .error_record import ErrorRecord
from .exceptions import ErrorRecordSerializationError, ErrorRecordValidationError
from .name_value import NameValuePair, from_pairs, to_json_dict
from .schema_validator import load_schema, validate_json

ERROR_RECORD_SCHEMA = "error-record.schema.json"

_SCALAR_FIELDS = (
    "guid",
    "application_name",
    "machine_name",
    "error_type",
    "message",
    "source",
    "detail",
    "fingerprint",
    "status_code",
    "duplicate_count",
    "is_protected",
    "sql",
    "host",
    "url",
    "http_method",
    "ip_address",
)

_DATE_FIELDS = ("creation_date", "deletion_date")

_COLLECTION_FIELDS = {
    "server_variables_serializable": "server_variables",
    "query_string_serializable": "query_string",
    "form_serializable": "form",
    "cookies_serializable": "cookies",
}


def as_utc(value: datetime) -> datetime:
    """Return the timestamp in UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    """Format a timestamp as ISO 8601 UTC with a ``Z`` suffix."""
    if value is None:
        return None
    return as_utc(value).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def to_epoch(value: datetime | None) -> int | None:
    """Return whole seconds since the Unix epoch, or None for no timestamp."""
    if value is None:
        return None
    return int(as_utc(value).timestamp())


def _pairs_or_none(record: ErrorRecord, attribute: str, serializable: str) -> list[dict[str, Any]] | None:
    if getattr(record, attribute) is None:
        return None
    pairs: list[NameValuePair] = getattr(record, serializable)
    return [pair.to_dict() for pair in pairs]


def to_dict(record: ErrorRecord) -> dict[str, Any]:
    """Convert a record to its full serialized form.

    Absent request collections are written as null, present ones as pair lists.
    """
    result: dict[str, Any] = {name: getattr(record, name) for name in _SCALAR_FIELDS}
    for name in _DATE_FIELDS:
        result[name] = format_timestamp(getattr(record, name))
    result["custom_data"] = dict(record.custom_data) if record.custom_data is not None else None
    for serializable, attribute in _COLLECTION_FIELDS.items():
        result[serializable] = _pairs_or_none(record, attribute, serializable)
    return result


def to_json(record: ErrorRecord) -> str:
    """Serialize a record to full-form JSON."""
    return json.dumps(to_dict(record))


def from_dict(data: Any) -> ErrorRecord:
    """Build a record from its full serialized form.

    Raises:
        ErrorRecordValidationError: If the document does not match the schema
        ErrorRecordSerializationError: If a timestamp is not ISO 8601
    """
    is_valid, errors = validate_json(data, load_schema(ERROR_RECORD_SCHEMA))
    if not is_valid:
        raise ErrorRecordValidationError(errors)

    kwargs: dict[str, Any] = {name: data[name] for name in _SCALAR_FIELDS if name in data}
    for name in _DATE_FIELDS:
        if name in data:
            try:
                kwargs[name] = parse_timestamp(data[name])
            except ValueError as exc:
                raise ErrorRecordSerializationError(f"Malformed {name}: {data[name]!r}") from exc
    if "custom_data" in data:
        custom_data = data["custom_data"]
        kwargs["custom_data"] = dict(custom_data) if custom_data is not None else None
    for serializable, attribute in _COLLECTION_FIELDS.items():
        pairs = data.get(serializable)
        if pairs is not None:
            kwargs[attribute] = from_pairs(pairs)

    return ErrorRecord(**kwargs)


def from_json(text: str) -> ErrorRecord:
    """Deserialize a record from full-form JSON.

    The source text is kept on the record as ``full_json``.

    Raises:
        ErrorRecordSerializationError: If the text is not valid JSON or holds a bad timestamp
        ErrorRecordValidationError: If the document does not match the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ErrorRecordSerializationError(f"Malformed error record JSON: {exc}") from exc

    record = from_dict(data)
    record.full_json = text
    return record


def to_detailed_dict(record: ErrorRecord) -> dict[str, Any]:
    """Convert a record to the flattened form used by API responses.

    Absent timestamps are omitted rather than written as zero. When a request
    collection repeats a name only its last value is kept.
    """
    server_variables = record.server_variables
    result: dict[str, Any] = {
        "guid": record.guid,
        "application_name": record.application_name,
        "custom_data": record.custom_data,
        "detail": record.detail,
        "duplicate_count": record.duplicate_count,
        "fingerprint": record.fingerprint,
        "http_method": record.http_method,
        "host": record.host,
        "ip_address": record.ip_address,
        "is_protected": record.is_protected,
        "machine_name": record.machine_name,
        "message": record.message,
        "sql": record.sql,
        "source": record.source,
        "status_code": record.status_code,
        "error_type": record.error_type,
        "url": record.url,
        "query_string": server_variables.get("QUERY_STRING") if server_variables is not None else None,
        "server_variables": to_json_dict(record.server_variables_serializable),
        "cookie_variables": to_json_dict(record.cookies_serializable),
        "query_string_variables": to_json_dict(record.query_string_serializable),
        "form_variables": to_json_dict(record.form_serializable),
    }
    for name in _DATE_FIELDS:
        epoch = to_epoch(getattr(record, name))
        if epoch is not None:
            result[name] = epoch
    return result


def to_detailed_json(record: ErrorRecord) -> str:
    """Serialize a record to detailed-form JSON."""
    return json.dumps(to_detailed_dict(record))
