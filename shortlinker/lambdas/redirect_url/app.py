import logging

from shortlinker.constants import ErrorCode, OutcomeKind
from shortlinker.engine import capture
from shortlinker.lambdas.common import engine_from_config, error_response, outcome_error_response, response_307
from shortlinker.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinker.utils import guarantee_500_response, load_config


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure to redirect short links:
    - Step 1: Extract short link from request path
    - Step 2: Initialize the short link engine
    - Step 3: Resolve the short link to its long URL
    - Step 4: Redirect client to long URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: long URL destination
        400: Bad client request
            message: missing short link in path parameters
        404: Not found
            message: short link never existed or expired
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'shortlink': '8M0kX'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'https://www.baidu.com'
    """
    # 0- Get application's config
    app_config = load_config('redirect_url')

    # 1- Extract short link from request's path
    shortlink = (event.get('pathParameters') or {}).get('shortlink')
    if not shortlink:
        logger.info('Missing "shortlink" in path. Responding with 400.', extra={'event': ErrorCode.MISSING_SHORTLINK})
        return error_response(400, message="missing 'shortlink' in path", error_code=ErrorCode.MISSING_SHORTLINK)

    # 2- Initialize the short link engine
    engine = engine_from_config(app_config)
    if not engine.ok:
        logger.error('Short link engine unavailable. Responding with 500.', extra={'event': ErrorCode.BACKEND_UNAVAILABLE})
        return outcome_error_response(engine)

    # 3- Resolve the short link
    outcome = capture(engine.value.unshorten, shortlink)

    # 4- Redirect client to long URL
    match outcome.kind:
        case OutcomeKind.SUCCESS:
            logger.info('Redirecting client to long URL. Responding with 307.', extra={'shortlink': shortlink})
            return response_307(location=outcome.value)
        case OutcomeKind.NOT_FOUND:
            logger.info('Short link not found. Responding with 404.', extra={'shortlink': shortlink, 'event': ErrorCode.SHORTLINK_NOT_FOUND})
            return outcome_error_response(outcome)
        case _:
            logger.error(
                'Failed to resolve short link. Responding with 500.',
                extra={'shortlink': shortlink, 'event': outcome.kind, 'error': str(outcome.error)},
            )
            return outcome_error_response(outcome)
