# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Helpers that describe a raised exception for an error record.

Built-in exceptions (those defined in Python's ``builtins`` module) are
usually raised as a side effect of something deeper, so the record promotes
the innermost exception of their chain. Application and third-party
exceptions are assumed to carry the useful message themselves and are
used as-is. Callers can replace the rule with their own predicate.
"""

import builtins
import traceback
from typing import Callable

UnwrapPredicate = Callable[[BaseException], bool]

HTTP_STATUS_RANGE = range(100, 600)


def is_builtin_exception(error: BaseException) -> bool:
    """Return True when the exception's class is defined in ``builtins``."""
    return type(error).__module__ == builtins.__name__


def get_base_exception(error: BaseException) -> BaseException:
    """Return the innermost exception of an exception chain.

    Explicit causes (``raise ... from``) are followed first, then implicit
    context unless it was suppressed.
    """
    seen = {id(error)}
    current = error
    while True:
        inner = current.__cause__
        if inner is None and not current.__suppress_context__:
            inner = current.__context__
        if inner is None or id(inner) in seen:
            return current
        seen.add(id(inner))
        current = inner


def exception_type_name(error: BaseException) -> str:
    """Return the qualified type name, without a module for builtins."""
    error_type = type(error)
    if error_type.__module__ == builtins.__name__:
        return error_type.__qualname__
    return f"{error_type.__module__}.{error_type.__qualname__}"


def exception_source(error: BaseException) -> str | None:
    """Return the name of the module whose code raised the exception."""
    tb = error.__traceback__
    if tb is None:
        return None
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_globals.get("__name__")


def format_detail(error: BaseException) -> str:
    """Format the exception with its traceback and chained causes."""
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


def get_status_code(error: BaseException) -> int | None:
    """Return the HTTP status code carried by the exception, if any.

    ``status_code`` attributes are taken as-is; ``code`` attributes (werkzeug's
    ``HTTPException``) only when they fall in the HTTP status range.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool):
        return status_code

    code = getattr(error, "code", None)
    if isinstance(code, int) and not isinstance(code, bool) and code in HTTP_STATUS_RANGE:
        return code
    return None
