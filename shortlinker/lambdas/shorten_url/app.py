import base64
import binascii
import json
import logging

from shortlinker.constants import ErrorCode, OutcomeKind
from shortlinker.engine import capture
from shortlinker.lambdas.common import engine_from_config, error_response, is_valid_url, json_response, outcome_error_response
from shortlinker.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinker.utils import guarantee_500_response, load_config


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract URL and expiration window from request body
    - Step 2: Initialize the short link engine
    - Step 3: Shorten the URL (reusing a live short link for the same URL)
    - Step 4: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            shortlink: short code for the URL
        400: Bad client request
            message: indicate cause of bad request (invalid JSON, URL or expiration)
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format.

    Example:
        >>> event = {'body': '{"url": "https://www.baidu.com", "expiration_in_minutes": 60}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])
        {'shortlink': '8M0kX'}
    """
    # 0- Get application's config
    app_config = load_config('shorten_url')

    # 1- Extract URL and expiration window from request body
    try:
        request_body = json.loads(_request_body(event))
    except (json.JSONDecodeError, UnicodeDecodeError, binascii.Error):
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': ErrorCode.INVALID_JSON_BODY})
        return error_response(400, message='invalid JSON body', error_code=ErrorCode.INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': ErrorCode.INVALID_JSON_BODY})
        return error_response(400, message='JSON body must be an object', error_code=ErrorCode.INVALID_JSON_BODY)

    url = request_body.get('url')
    if not is_valid_url(url):
        logger.info('Missing or invalid URL. Responding with 400.', extra={'event': ErrorCode.INVALID_URL})
        return error_response(400, message="missing or invalid 'url' in JSON body", error_code=ErrorCode.INVALID_URL)

    ttl_minutes = request_body.get('expiration_in_minutes')
    if not isinstance(ttl_minutes, int) or isinstance(ttl_minutes, bool) or ttl_minutes <= 0:
        logger.info('Missing or invalid expiration. Responding with 400.', extra={'event': ErrorCode.INVALID_EXPIRATION})
        return error_response(
            400,
            message="'expiration_in_minutes' must be a positive integer",
            error_code=ErrorCode.INVALID_EXPIRATION,
        )

    # 2- Initialize the short link engine
    engine = engine_from_config(app_config)
    if not engine.ok:
        logger.error('Short link engine unavailable. Responding with 500.', extra={'event': ErrorCode.BACKEND_UNAVAILABLE})
        return outcome_error_response(engine)

    # 3- Shorten the URL
    outcome = capture(engine.value.shorten, url, ttl_minutes)

    # 4- Respond to user
    match outcome.kind:
        case OutcomeKind.SUCCESS:
            logger.info('Shortened URL. Responding with 201.', extra={'shortlink': outcome.value})
            return json_response(201, {'shortlink': outcome.value})
        case _:
            logger.error(
                'Failed to shorten URL. Responding with 500.',
                extra={'event': outcome.kind, 'error': str(outcome.error)},
            )
            return outcome_error_response(outcome)
