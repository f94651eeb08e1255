import logging

from linkfast.types import LambdaEvent, LambdaContext, LambdaResponse
from linkfast.application import application
from linkfast.exceptions import ShortcodeNotFoundError
from linkfast.dao.exceptions import DataStoreError
from linkfast.utils.helpers import guarantee_500_response, is_valid_shortcode
from linkfast.lambdas.responses import response_301, response_404, response_500
from linkfast.lambdas.redirect_url.constants import (
    INVALID_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract and validate the shortcode path parameter
    - Step 2: Resolve the original URL (hot cache first, then data store)
    - Step 3: Redirect client to the original URL

    The click counter is incremented in the background and never delays the response.

    HTTP responses:
        301: Successful redirect
            headers:
                Location: original URL
        404: Not found
            error: 'not found' (malformed or unknown shortcode)
        500: Internal server error
            error: 'server error'

    Example:
        >>> event = {'pathParameters': {'shortcode': 'r25h7cPM'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com'
    """
    # 1- Extract and validate shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not is_valid_shortcode(shortcode):
        logger.info('Malformed shortcode in path. Responding with 404.', extra={'shortcode': shortcode, 'event': INVALID_SHORTCODE})
        return response_404()

    # 2- Resolve the original URL
    try:
        target_url = application().redirector.resolve(shortcode)
    except ShortcodeNotFoundError as e:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(e.public_message)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_UNAVAILABLE})
        return response_500()

    # 3- Redirect client to the original URL
    logger.info('Redirecting client to original URL. Responding with 301.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_301(location=target_url)
