# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Request context adapter for Flask applications."""

from flask import Request

from .name_value import NameValueCollection
from .request_context import RequestContext, flatten_cookies


def context_from_flask_request(request: Request) -> RequestContext:
    """Build a RequestContext from a Flask request.

    Repeated query and form parameters are kept in request order.

    Example:
        >>> from flask import request
        >>> from exceptional import capture
        >>> record = capture(error, context_from_flask_request(request))
    """
    context = RequestContext.from_wsgi_environ(request.environ)
    context.query_string = NameValueCollection(request.args.items(multi=True))
    context.form = NameValueCollection(request.form.items(multi=True))
    context.cookies = flatten_cookies(request.cookies.items(multi=True))
    return context
