# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Exceptional error records.

Captures application exceptions as error records, fingerprints them for
rollup of duplicates, and serializes them for storage and display.

Example:
    >>> from exceptional import ErrorRecord, RequestContext, capture
    >>>
    >>> try:
    ...     open("/missing")
    ... except OSError as e:
    ...     record = capture(e, RequestContext.from_wsgi_environ(environ))
    >>> stored = record.to_json()
    >>> restored = ErrorRecord.from_json(stored)
"""

__version__ = "0.1.0"

from .classification import get_base_exception, is_builtin_exception
from .config import (
    ConfigProvider,
    EnvConfigProvider,
    ErrorSettings,
    load_settings,
)
from .error_record import ErrorRecord, capture
from .exceptions import (
    ErrorNotFoundError,
    ErrorRecordSerializationError,
    ErrorRecordValidationError,
    ExceptionalError,
)
from .fingerprint import compute_fingerprint
from .memory_store import MemoryErrorStore
from .name_value import NameValueCollection, NameValuePair, from_pairs, to_json_dict, to_pairs
from .request_context import RequestContext, get_remote_ip
from .serialization import from_json, to_detailed_json, to_json

__all__ = [
    # Version
    "__version__",
    # Records
    "ErrorRecord",
    "capture",
    "compute_fingerprint",
    "get_base_exception",
    "is_builtin_exception",
    # Collections
    "NameValueCollection",
    "NameValuePair",
    "from_pairs",
    "to_pairs",
    "to_json_dict",
    # Request context
    "RequestContext",
    "get_remote_ip",
    # Serialization
    "to_json",
    "from_json",
    "to_detailed_json",
    # Configuration
    "ConfigProvider",
    "EnvConfigProvider",
    "ErrorSettings",
    "load_settings",
    # Stores
    "MemoryErrorStore",
    # Exceptions
    "ExceptionalError",
    "ErrorRecordSerializationError",
    "ErrorRecordValidationError",
    "ErrorNotFoundError",
]
