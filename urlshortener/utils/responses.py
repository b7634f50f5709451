"""API Gateway (Lambda proxy) response builders shared by all handlers."""

import json
from typing import Any

from urlshortener.types import LambdaResponse


JSON_HEADERS = {'Content-Type': 'application/json'}


def _error_body(base: str, message: str | None, error_code: str | None) -> str:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return json.dumps(body)


def response_200(body: Any, status_code: int = 200) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_201(body: Any) -> LambdaResponse:
    return response_200(body, status_code=201)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 400,
        'headers': dict(JSON_HEADERS),
        'body': _error_body('Bad Request', message, error_code),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 404,
        'headers': dict(JSON_HEADERS),
        'body': _error_body('Not Found', message, error_code),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 500,
        'headers': dict(JSON_HEADERS),
        'body': _error_body('Internal Server Error', message, error_code),
    }
