# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""In-memory error store with fingerprint rollup and soft deletion."""

import logging
import threading
from datetime import datetime, timedelta, timezone

from .config import ConfigProvider, EnvConfigProvider
from .error_record import ErrorRecord
from .exceptions import ErrorNotFoundError
from .serialization import as_utc

logger = logging.getLogger(__name__)

MAX_ERRORS_KEY = "EXCEPTIONAL_MAX_ERRORS"
ROLLUP_SECONDS_KEY = "EXCEPTIONAL_ROLLUP_SECONDS"


class MemoryErrorStore:
    """Error store that keeps records in process memory.

    Records are stored as clones so callers never share state with the
    store. Matching fingerprints within the rollup window are collapsed into
    the existing record by incrementing its ``duplicate_count``; the lookup
    and the increment happen under one lock.
    """

    def __init__(self, max_errors: int = 10000, rollup_seconds: int = 600):
        """
        Initialize error store.

        Args:
            max_errors: Maximum number of errors to keep in memory
            rollup_seconds: Window in which a matching error is rolled up
                instead of stored. 0 disables rollup.
        """
        self.max_errors = max_errors
        self.rollup_window = timedelta(seconds=rollup_seconds)
        self.errors: list[ErrorRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, provider: ConfigProvider | None = None) -> "MemoryErrorStore":
        """Create a store from configuration.

        Reads EXCEPTIONAL_MAX_ERRORS and EXCEPTIONAL_ROLLUP_SECONDS.
        """
        provider = provider or EnvConfigProvider()
        return cls(
            max_errors=provider.get_int(MAX_ERRORS_KEY, 10000),
            rollup_seconds=provider.get_int(ROLLUP_SECONDS_KEY, 600),
        )

    def _find_rollup_match(self, record: ErrorRecord) -> ErrorRecord | None:
        if record.fingerprint is None or not self.rollup_window:
            return None
        now = datetime.now(timezone.utc)
        for existing in self.errors:
            if existing.deletion_date is not None or existing.fingerprint != record.fingerprint:
                continue
            if existing.creation_date is not None and now - as_utc(existing.creation_date) <= self.rollup_window:
                return existing
        return None

    def _find(self, guid: str) -> ErrorRecord:
        for error in self.errors:
            if error.guid == guid:
                return error
        raise ErrorNotFoundError(f"Error {guid} not found")

    def log(self, record: ErrorRecord) -> str:
        """
        Add an error to the store, or roll it up into a matching one.

        Args:
            record: The error record to add

        Returns:
            The guid of the stored record (the existing one on rollup)
        """
        with self._lock:
            match = self._find_rollup_match(record)
            if match is not None:
                match.duplicate_count += 1
                logger.debug(f"Rolled up {record.guid} into {match.guid} (count={match.duplicate_count})")
                return match.guid

            stored = record.clone()
            stored.id = self._next_id
            self._next_id += 1
            # Most recent first
            self.errors.insert(0, stored)
            self._trim()
            return stored.guid

    def _trim(self) -> None:
        while len(self.errors) > self.max_errors:
            for index in range(len(self.errors) - 1, -1, -1):
                if not self.errors[index].is_protected:
                    del self.errors[index]
                    break
            else:
                return

    def get(self, guid: str) -> ErrorRecord:
        """
        Get a copy of a specific error by guid.

        Raises:
            ErrorNotFoundError: If no such error is stored
        """
        with self._lock:
            return self._find(guid).clone()

    def get_errors(
        self,
        application_name: str | None = None,
        include_deleted: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[ErrorRecord]:
        """
        Get copies of stored errors, most recent first.

        Args:
            application_name: Filter by application name
            include_deleted: Include soft-deleted errors
            limit: Maximum number of errors to return
            offset: Number of errors to skip

        Returns:
            List of error records matching the filters
        """
        with self._lock:
            filtered = self.errors
            if not include_deleted:
                filtered = [e for e in filtered if e.deletion_date is None]
            if application_name:
                filtered = [e for e in filtered if e.application_name == application_name]
            return [e.clone() for e in filtered[offset:offset + limit]]

    def get_count(self, include_deleted: bool = False) -> int:
        with self._lock:
            if include_deleted:
                return len(self.errors)
            return sum(1 for e in self.errors if e.deletion_date is None)

    def protect(self, guid: str) -> None:
        """Protect an error from deletion and restore it if it was deleted."""
        with self._lock:
            error = self._find(guid)
            error.is_protected = True
            error.deletion_date = None

    def delete(self, guid: str) -> bool:
        """
        Soft-delete an error.

        Returns:
            True if the error was deleted, False if it is protected
        """
        with self._lock:
            error = self._find(guid)
            if error.is_protected:
                logger.warning(f"Refusing to delete protected error {guid}")
                return False
            error.deletion_date = datetime.now(timezone.utc)
            return True

    def clear(self):
        """Clear all errors from the store."""
        with self._lock:
            self.errors = []
