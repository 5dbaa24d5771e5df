"""Request interceptors, run in the order listed in ``settings.MIDDLEWARE``.

Each one either lets the request continue (returns None, or calls the next
handler) or short-circuits it with a response of its own.
"""

import json
import logging
import time
from functools import wraps

from tmbackend.api import errors, tokens

logger = logging.getLogger('tmbackend.api')
request_logger = logging.getLogger('tmbackend.request')

JSON_METHODS = ('POST', 'PUT', 'PATCH')


def token_required(view_func):
    """Mark a view as reachable only with a valid bearer token."""
    @wraps(view_func)
    def wrapped_view(*args, **kwargs):
        return view_func(*args, **kwargs)
    wrapped_view.token_required = True
    return wrapped_view


class RequestLogMiddleware:
    """One access-log line per request: method, path, status, duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.perf_counter()
        response = self.get_response(request)
        elapsed = (time.perf_counter() - started) * 1000
        request_logger.info(
            '%s %s %s %.1f ms', request.method, request.get_full_path(), response.status_code, elapsed
        )
        return response


class UnhandledErrorMiddleware:
    """Turn any exception escaping a view into a bare 500."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return errors.internal_error()


class JsonBodyMiddleware:
    """Decode the request body into ``request.json`` ({} when empty)."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.json = {}
        if request.method in JSON_METHODS and request.body:
            try:
                request.json = json.loads(request.body)
            except ValueError:
                return errors.bad_request('Malformed JSON body')
        return self.get_response(request)


class BearerTokenMiddleware:
    """Auth gate for views wrapped with `token_required`.

    Reads ``Authorization: Bearer <token>``; on success the decoded claims
    are stored on ``request.claims``, otherwise the request ends with 401.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.claims = None
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if not getattr(view_func, 'token_required', False):
            return None
        header = request.headers.get('Authorization')
        if not header:
            return errors.unauthenticated('Missing Authorization header')
        scheme, _, token = header.partition(' ')
        token = token.strip()
        if scheme != 'Bearer' or not token:
            return errors.unauthenticated('Invalid Authorization header format')
        claims = tokens.verify(token)
        if claims is None:
            return errors.unauthenticated('Token invalid or expired')
        request.claims = claims
        return None
