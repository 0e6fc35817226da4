# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Snapshot of the request an error was raised while handling."""

import ipaddress
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping
from urllib.parse import parse_qsl

from werkzeug.http import parse_cookie

from .name_value import NameValueCollection

UNKNOWN_IP = "0.0.0.0"

_IPV4_PATTERN = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b")


def _is_public_ip(address: str) -> bool:
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return False
    return not (parsed.is_private or parsed.is_loopback)


def get_remote_ip(server_variables: NameValueCollection) -> str:
    """Return the client address of a request.

    ``REMOTE_ADDR`` may be a proxy, so a public IPv4 address found in
    ``HTTP_X_FORWARDED_FOR`` takes precedence over it.
    """
    ip = server_variables.get("REMOTE_ADDR")
    forwarded = server_variables.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        match = _IPV4_PATTERN.search(forwarded)
        if match and _is_public_ip(match.group(0)):
            ip = match.group(0)
    return ip or UNKNOWN_IP


def flatten_cookies(cookies: Mapping[str, Any] | Iterable[Any] | None) -> NameValueCollection:
    """Reduce a cookie collection to plain name/value pairs.

    Accepts a mapping of name to value or morsel (``http.cookies``), a list of
    ``(name, value)`` tuples, or objects exposing ``name`` and ``value``.
    Cookie metadata (path, expiry, ...) is dropped.
    """
    result = NameValueCollection()
    if cookies is None:
        return result

    items = cookies.items() if isinstance(cookies, Mapping) else cookies
    for item in items:
        if isinstance(item, tuple):
            name, value = item
        else:
            name, value = item.name, item
        result.add(name, getattr(value, "value", value))
    return result


@dataclass
class RequestContext:
    """Request data captured alongside an error.

    Attributes:
        server_variables: CGI-style server variables (HTTP_HOST, URL, ...)
        query_string: Parsed query string, repeated parameters kept
        form: Posted form fields
        cookies: Request cookies reduced to name/value pairs
    """

    server_variables: NameValueCollection = field(default_factory=NameValueCollection)
    query_string: NameValueCollection = field(default_factory=NameValueCollection)
    form: NameValueCollection = field(default_factory=NameValueCollection)
    cookies: NameValueCollection = field(default_factory=NameValueCollection)

    @property
    def remote_address(self) -> str:
        return get_remote_ip(self.server_variables)

    @classmethod
    def from_wsgi_environ(
        cls,
        environ: Mapping[str, Any],
        form: Mapping[str, Any] | Iterable[Any] | None = None,
    ) -> "RequestContext":
        """Build a context from a WSGI environ.

        The request body is not read here since the application may already
        have consumed ``wsgi.input``; pass parsed form fields via ``form``.

        Args:
            environ: WSGI environ dictionary
            form: Optional parsed form fields

        Returns:
            RequestContext for the request
        """
        server_variables = NameValueCollection()
        for name, value in environ.items():
            if isinstance(value, str):
                server_variables.add(name, value)

        return cls(
            server_variables=server_variables,
            query_string=NameValueCollection(
                parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True)
            ),
            form=NameValueCollection(form),
            cookies=flatten_cookies(parse_cookie(environ.get("HTTP_COOKIE", "")).items(multi=True)),
        )
