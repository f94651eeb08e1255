import json
import logging

from linkfast.types import LambdaEvent, LambdaContext, LambdaResponse
from linkfast.application import application
from linkfast.exceptions import InvalidURLError, ShortcodeGenerationError, PersistenceError
from linkfast.utils.helpers import guarantee_500_response
from linkfast.lambdas.responses import response_200, response_400, response_500
from linkfast.lambdas.shorten_url.constants import (
    INVALID_JSON,
    INVALID_URL,
    SHORTCODE_GENERATION_FAILED,
    PERSISTENCE_FAILED,
    SHORTEN_SUCCESS,
    SHORTEN_DUPLICATE,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON request body
    - Step 2: Shorten the URL (normalize, validate, deduplicate, persist)
    - Step 3: Respond with the short URL

    HTTP responses:
        200: Successful URL shortening (also when the URL was shortened before)
            short_url: public short URL
            original_url: normalized original URL
            short_code: 8-character short code
        400: Bad client request
            error: 'invalid json' or 'invalid url format'
        500: Internal server error
            error: 'server error' or 'failed to save url'

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object (not used directly).

    Returns:
        LambdaResponse:
            JSON response following API Gateway Lambda Proxy output format.

    Example:
        >>> event = {'body': '{"url": "openai.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['original_url']
        'https://openai.com'
    """
    # 1- Parse the JSON request body
    try:
        request_body = json.loads(event.get('body') or '')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400('invalid json')

    # A missing or null url becomes '' and fails URL validation below
    url = (request_body.get('url') or '') if isinstance(request_body, dict) else None
    if not isinstance(url, str):
        logger.info('JSON body is not an object with a string url. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400('invalid json')

    # 2- Shorten the URL
    linkfast = application()
    try:
        result = linkfast.shortener.shorten(url)
    except InvalidURLError as e:
        logger.info('Invalid URL format. Responding with 400.', extra={'event': INVALID_URL, 'reason': str(e)})
        return response_400(e.public_message)
    except ShortcodeGenerationError as e:
        logger.exception('Failed to generate short code. Responding with 500.', extra={'event': SHORTCODE_GENERATION_FAILED})
        return response_500(e.public_message)
    except PersistenceError as e:
        logger.exception('Failed to save short URL record. Responding with 500.', extra={'event': PERSISTENCE_FAILED})
        return response_500(e.public_message)

    # 3- Respond with the short URL
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': result.shortcode, 'event': SHORTEN_SUCCESS if result.created else SHORTEN_DUPLICATE},
    )
    return response_200(
        {
            'short_url': linkfast.short_url(result.shortcode, event),
            'original_url': result.target,
            'short_code': result.shortcode,
        }
    )
