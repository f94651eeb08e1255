"""Helper utilities for URL handling and Lambda handlers.

Functions:
    normalize_url() -> str
        Prefix scheme-less URLs with https://
    is_valid_url() -> bool
        Check that a URL is absolute (non-empty scheme and host)
    is_valid_shortcode() -> bool
        Check that a string has the short code format
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    >>> from linkfast.utils.helpers import normalize_url, is_valid_url
    >>> normalize_url('example.com/a')
    'https://example.com/a'
    >>> is_valid_url('https://example.com/a')
    True
    >>> is_valid_url('https://')
    False
"""

import re
import json
import logging
import functools
from urllib.parse import urlparse
from collections.abc import Callable

from linkfast.types import LambdaEvent, LambdaContext, LambdaResponse
from linkfast.constants import ShortCode, Defaults, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)

SUPPORTED_SCHEME_PREFIXES = ('http://', 'https://')
DEFAULT_SCHEME_PREFIX = 'https://'
_SHORTCODE_RE = re.compile(ShortCode.PATTERN)


def normalize_url(url: str) -> str:
    """Prefix a URL with https:// unless it already starts with http:// or https://

    NOTE: This is the only normalization applied. Two URLs which differ in any
          other way (trailing slash, query parameter order, letter case, ...)
          are treated as distinct URLs.
    """
    if url.startswith(SUPPORTED_SCHEME_PREFIXES):
        return url
    return f'{DEFAULT_SCHEME_PREFIX}{url}'


def is_valid_url(url: str) -> bool:
    """Return True if url parses as an absolute URL with a non-empty scheme and host

    Control characters are rejected anywhere in the URL, whitespace only in
    the host. A space in the path or query is accepted as-is.
    """
    if not url or any(ord(ch) < 0x20 or ch == '\x7f' for ch in url):
        return False
    try:
        components = urlparse(url)
        host = components.hostname
    except ValueError:
        return False
    return bool(components.scheme) and bool(host) and not any(ch.isspace() for ch in host)


def is_valid_shortcode(shortcode: str | None) -> bool:
    return shortcode is not None and _SHORTCODE_RE.fullmatch(shortcode) is not None


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://links.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
             - "http://localhost:3000" (no domain in the event)
    """
    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # Custom domain: skip stage
        return f'https://{domain}'
    elif domain:
        # Default AWS domain: include stage
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (tests, local gateway emulators, etc.)
        return Defaults.LOCAL_BASE_URL


def get_short_url(shortcode: str, base: str) -> str:
    """Get string representation of shortened URL as {base}/{shortcode}"""
    return f'{base.rstrip("/")}/{shortcode}'


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator ensuring a Lambda handler always answers, even on unexpected errors.

    Any exception escaping the handler is logged with its traceback and replaced
    by a generic HTTP 500 response which doesn't leak internal detail.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps({'error': 'server error'}),
            }

    return wrapper
