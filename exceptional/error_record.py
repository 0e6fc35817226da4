# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""The error record: everything known about one occurrence of an error."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import uuid4

from .classification import (
    UnwrapPredicate,
    exception_source,
    exception_type_name,
    format_detail,
    get_base_exception,
    get_status_code,
    is_builtin_exception,
)
from .config import ErrorSettings, load_settings
from .fingerprint import compute_fingerprint
from .name_value import NameValueCollection, NameValuePair, from_pairs, to_pairs
from .request_context import RequestContext, get_remote_ip

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _copy_collection(collection: NameValueCollection | None) -> NameValueCollection | None:
    return collection.copy() if collection is not None else None


@dataclass
class ErrorRecord:
    """A logical application error, as opposed to the exception it represents.

    Identity fields, the creation date and the fingerprint are fixed when the
    record is captured. Afterwards only a store changes the record, by
    incrementing ``duplicate_count`` on rollup or by setting ``is_protected``
    and ``deletion_date``.

    ``host``, ``url``, ``http_method`` and ``ip_address`` are derived from
    ``server_variables`` when the record is built, unless given explicitly.
    ``exception``, ``full_json`` and ``rollup_per_server`` are never serialized.
    """

    guid: str = field(default_factory=lambda: str(uuid4()))
    id: int | None = None
    application_name: str | None = None
    machine_name: str | None = None
    error_type: str | None = None
    message: str | None = None
    source: str | None = None
    detail: str | None = None
    fingerprint: int | None = None
    creation_date: datetime | None = field(default_factory=_utcnow)
    status_code: int | None = None
    server_variables: NameValueCollection | None = None
    query_string: NameValueCollection | None = None
    form: NameValueCollection | None = None
    cookies: NameValueCollection | None = None
    custom_data: dict[str, str] | None = None
    duplicate_count: int = 1
    is_protected: bool = False
    deletion_date: datetime | None = None
    sql: str | None = None
    host: str | None = None
    url: str | None = None
    http_method: str | None = None
    ip_address: str | None = None
    exception: BaseException | None = field(default=None, repr=False, compare=False)
    full_json: str | None = field(default=None, repr=False, compare=False)
    rollup_per_server: bool = field(default=False, compare=False)

    def __post_init__(self):
        """Derive request fields that were not supplied."""
        variables = self.server_variables
        if self.host is None:
            self.host = variables.get("HTTP_HOST", "") if variables is not None else ""
        if self.url is None:
            self.url = (variables.get("URL") or variables.get("PATH_INFO", "")) if variables is not None else ""
        if self.http_method is None:
            self.http_method = variables.get("REQUEST_METHOD", "") if variables is not None else ""
        if self.ip_address is None:
            self.ip_address = get_remote_ip(variables) if variables is not None else ""

    @classmethod
    def from_exception(cls, error: BaseException, context: RequestContext | None = None, **kwargs: Any) -> "ErrorRecord":
        """Capture an exception. See :func:`capture`."""
        return capture(error, context, **kwargs)

    def clone(self) -> "ErrorRecord":
        """Return a copy whose collections and custom data are independent of this record."""
        return replace(
            self,
            server_variables=_copy_collection(self.server_variables),
            query_string=_copy_collection(self.query_string),
            form=_copy_collection(self.form),
            cookies=_copy_collection(self.cookies),
            custom_data=dict(self.custom_data) if self.custom_data is not None else None,
        )

    # Pair-list views of the request collections, used for serialization
    @property
    def server_variables_serializable(self) -> list[NameValuePair]:
        return to_pairs(self.server_variables)

    @server_variables_serializable.setter
    def server_variables_serializable(self, pairs: list[Any]) -> None:
        self.server_variables = from_pairs(pairs)

    @property
    def query_string_serializable(self) -> list[NameValuePair]:
        return to_pairs(self.query_string)

    @query_string_serializable.setter
    def query_string_serializable(self, pairs: list[Any]) -> None:
        self.query_string = from_pairs(pairs)

    @property
    def form_serializable(self) -> list[NameValuePair]:
        return to_pairs(self.form)

    @form_serializable.setter
    def form_serializable(self, pairs: list[Any]) -> None:
        self.form = from_pairs(pairs)

    @property
    def cookies_serializable(self) -> list[NameValuePair]:
        return to_pairs(self.cookies)

    @cookies_serializable.setter
    def cookies_serializable(self, pairs: list[Any]) -> None:
        self.cookies = from_pairs(pairs)

    def to_dict(self) -> dict[str, Any]:
        from .serialization import to_dict

        return to_dict(self)

    def to_json(self) -> str:
        from .serialization import to_json

        return to_json(self)

    def to_detailed_json(self) -> str:
        from .serialization import to_detailed_json

        return to_detailed_json(self)

    @classmethod
    def from_json(cls, text: str) -> "ErrorRecord":
        from .serialization import from_json

        return from_json(text)

    def __str__(self) -> str:
        return self.message or ""


def capture(
    error: BaseException,
    context: RequestContext | None = None,
    *,
    settings: ErrorSettings | None = None,
    custom_data: Mapping[str, str] | None = None,
    sql: str | None = None,
    unwrap_predicate: UnwrapPredicate = is_builtin_exception,
) -> ErrorRecord:
    """Build an error record from a raised exception.

    Args:
        error: The exception to record
        context: Request being handled when the exception was raised, if any
        settings: Application settings. Read from the environment when omitted.
        custom_data: Extra values to attach to the record
        sql: Database command text associated with the error
        unwrap_predicate: Decides whether the innermost exception of the chain
            supplies the type, message and source. Defaults to built-in exceptions.

    Returns:
        The captured ErrorRecord with its fingerprint computed

    Raises:
        ValueError: If error is None
    """
    if error is None:
        raise ValueError("error must not be None")

    settings = settings or load_settings()
    base = get_base_exception(error) if unwrap_predicate(error) else error
    detail = format_detail(error)

    record = ErrorRecord(
        application_name=settings.application_name,
        machine_name=settings.machine_name,
        error_type=exception_type_name(base),
        message=str(base),
        source=exception_source(base),
        detail=detail,
        fingerprint=compute_fingerprint(detail, settings.machine_name, settings.rollup_per_server),
        status_code=get_status_code(error),
        server_variables=_copy_collection(context.server_variables) if context is not None else None,
        query_string=_copy_collection(context.query_string) if context is not None else None,
        form=_copy_collection(context.form) if context is not None else None,
        cookies=_copy_collection(context.cookies) if context is not None else None,
        custom_data=dict(custom_data) if custom_data is not None else None,
        sql=sql,
        exception=error,
        rollup_per_server=settings.rollup_per_server,
    )

    logger.debug(f"Captured {record.error_type} as {record.guid} (fingerprint={record.fingerprint})")
    return record
