# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Utilities for validating JSON documents against JSON Schemas."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled schema by file name (e.g. ``error-record.schema.json``)."""
    return json.loads((SCHEMA_DIR / name).read_text(encoding="utf-8"))


def validate_json(document: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """Validate a JSON document against a JSON schema.

    Args:
        document: The JSON document to validate.
        schema: The JSON schema to validate against.

    Returns:
        Tuple of (is_valid, errors). is_valid is True when the document conforms
        to the schema. errors is a list of human-readable validation errors (empty if valid).
    """
    try:
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
        if not errors:
            return True, []

        messages: list[str] = []
        for err in errors:
            path = ".".join([str(p) for p in err.absolute_path])
            location = f" at '{path}'" if path else ""
            messages.append(f"{err.message}{location}")
        return False, messages
    except Exception as exc:  # Fallback for malformed schemas or unexpected issues
        logger.error(f"Schema validation failed due to an internal error: {exc}")
        return False, [str(exc)]
