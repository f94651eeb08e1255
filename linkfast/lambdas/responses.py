"""HTTP response builders in API Gateway Lambda Proxy output format

Error bodies have a single `error` key with a client-safe message:

    {"error": "invalid url format"}
"""

import json
from typing import Any

from linkfast.types import LambdaResponse, HttpHeaders


JSON_HEADERS: HttpHeaders = {'Content-Type': 'application/json'}
HTML_HEADERS: HttpHeaders = {'Content-Type': 'text/html; charset=utf-8'}


def response_json(status_code: int, body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return response_json(200, body)


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str) -> LambdaResponse:
    return response_json(400, {'error': message})


def response_404(message: str = 'not found') -> LambdaResponse:
    return response_json(404, {'error': message})


def response_500(message: str = 'server error') -> LambdaResponse:
    return response_json(500, {'error': message})


def response_html(html: str) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': dict(HTML_HEADERS),
        'body': html,
    }
