"""Shared building blocks of the Lambda handlers

Functions:
    json_response(status_code, body, headers=None) -> dict
    error_response(status_code, message, error_code=None) -> dict
    outcome_error_response(outcome) -> dict
    response_307(location) -> dict
    is_valid_url(url) -> bool
    engine_from_config(app_config) -> Outcome[ShortLinkEngine]
"""

import json
import logging
from typing import Any
from urllib.parse import urlparse

from shortlinker.constants import ErrorCode, OutcomeKind
from shortlinker.engine import Outcome, ShortLinkEngine, initialize_engine
from shortlinker.types import LambdaConfiguration, LambdaResponse
from shortlinker.utils import app_prefix


logger = logging.getLogger(__name__)

# fmt: off
STATUS_BY_KIND = {
    OutcomeKind.NOT_FOUND:           404,
    OutcomeKind.BACKEND_UNAVAILABLE: 500,
    OutcomeKind.INTERNAL_ERROR:      500,
}
ERROR_CODE_BY_KIND = {
    OutcomeKind.NOT_FOUND:           ErrorCode.SHORTLINK_NOT_FOUND,
    OutcomeKind.BACKEND_UNAVAILABLE: ErrorCode.BACKEND_UNAVAILABLE,
}
# fmt: on

BASE_MESSAGES = {
    400: 'Bad Request',
    404: 'Not Found',
    500: 'Internal Server Error',
}

ALLOWED_URL_SCHEMES = frozenset({'http', 'https'})


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(status_code: int, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = BASE_MESSAGES.get(status_code, 'Error')
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(status_code, body)


def outcome_error_response(outcome: Outcome) -> LambdaResponse:
    """Translate a failed outcome into an error response.

    Only classified outcomes (not found) expose their message to the client.
    """
    status_code = STATUS_BY_KIND[outcome.kind]
    message = str(outcome.error) if outcome.classified else None
    return error_response(status_code, message=message, error_code=ERROR_CODE_BY_KIND.get(outcome.kind))


def response_307(location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def is_valid_url(url: Any) -> bool:
    if not isinstance(url, str) or not url:
        return False
    components = urlparse(url)
    return components.scheme in ALLOWED_URL_SCHEMES and bool(components.netloc)


def engine_from_config(app_config: LambdaConfiguration) -> Outcome[ShortLinkEngine]:
    """Initialize the engine from a lambda configuration (see load_config())"""
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    atomic_writes = bool(app_config.get('engine', {}).get('atomic_writes', False))
    return initialize_engine(redis_config, prefix=app_prefix(), atomic_writes=atomic_writes)
