import logging

from shortlinker.constants import ErrorCode, OutcomeKind
from shortlinker.engine import capture
from shortlinker.lambdas.common import engine_from_config, error_response, json_response, outcome_error_response
from shortlinker.types import LambdaContext, LambdaEvent, LambdaResponse
from shortlinker.utils import guarantee_500_response, load_config


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests for short link details

    HTTP responses:
        200: Detail Record of the short link
            url, created_at, expiration_in_minutes
        400: missing 'shortlink' query parameter
        404: short link never existed or its Detail Record expired
        500: internal server error

    Example:
        >>> event = {'queryStringParameters': {'shortlink': '8M0kX'}}
        >>> json.loads(lambda_handler(event, None)['body'])
        {'url': 'https://www.baidu.com', 'created_at': '2019-12-12T12:12:12Z', 'expiration_in_minutes': 60}
    """
    app_config = load_config('shortlink_info')

    shortlink = (event.get('queryStringParameters') or {}).get('shortlink')
    if not shortlink:
        logger.info('Missing "shortlink" query parameter. Responding with 400.', extra={'event': ErrorCode.MISSING_SHORTLINK})
        return error_response(400, message="missing 'shortlink' query parameter", error_code=ErrorCode.MISSING_SHORTLINK)

    engine = engine_from_config(app_config)
    if not engine.ok:
        logger.error('Short link engine unavailable. Responding with 500.', extra={'event': ErrorCode.BACKEND_UNAVAILABLE})
        return outcome_error_response(engine)

    outcome = capture(engine.value.shortlink_info, shortlink)
    match outcome.kind:
        case OutcomeKind.SUCCESS:
            return json_response(200, outcome.value.to_dict())
        case OutcomeKind.NOT_FOUND:
            logger.info('Short link not found. Responding with 404.', extra={'shortlink': shortlink, 'event': ErrorCode.SHORTLINK_NOT_FOUND})
            return outcome_error_response(outcome)
        case _:
            logger.error(
                'Failed to read short link details. Responding with 500.',
                extra={'shortlink': shortlink, 'event': outcome.kind, 'error': str(outcome.error)},
            )
            return outcome_error_response(outcome)
