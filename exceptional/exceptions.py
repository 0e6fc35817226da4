# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Exceptions raised by the error record model."""


class ExceptionalError(Exception):
    """Base exception for error record operations."""
    pass


class ErrorRecordSerializationError(ExceptionalError):
    """Raised when serialized error record text cannot be parsed."""
    pass


class ErrorRecordValidationError(ExceptionalError):
    """Raised when a deserialized document does not match the error record schema.

    Attributes:
        errors: List of validation error messages
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid error record: {'; '.join(errors)}")


class ErrorNotFoundError(ExceptionalError):
    """Raised when an error record is not present in a store."""
    pass
