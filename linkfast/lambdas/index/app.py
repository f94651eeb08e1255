import logging

from linkfast.types import LambdaEvent, LambdaContext, LambdaResponse
from linkfast.utils.helpers import guarantee_500_response
from linkfast.lambdas.responses import response_html
from linkfast.lambdas.index.template import INDEX_PAGE


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Serve the single-page HTML form which posts URLs to /api/shorten"""
    logger.debug('Serving index page.')
    return response_html(INDEX_PAGE)
