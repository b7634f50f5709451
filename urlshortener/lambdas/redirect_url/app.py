import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import ConfigurationError
from urlshortener.dao.redis import ShortLinkRedisDAO
from urlshortener.dao.exceptions import ShortLinkNotFoundError
from urlshortener.utils import load_config, get_short_url, app_prefix, is_valid_shortcode
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_302, response_400, response_404, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_LINK_NOT_FOUND,
    CONFIGURATION_ERROR,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get short link record from database
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: no short link is stored under the shortcode
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (FileNotFoundError, ConfigurationError):
        logger.exception('Failed to load configuration for redirect URL function. Responding with 500.')
        return response_500(error_code=CONFIGURATION_ERROR)
    else:
        logger.debug('Assuming Redis as the backend database for short links')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    short_url = get_short_url(shortcode, event)
    not_found = response_404(message=f"short url {short_url} doesn't exist", error_code=SHORT_LINK_NOT_FOUND)
    if not is_valid_shortcode(shortcode):
        logger.info('Malformed shortcode. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND})
        return not_found
    logger.debug('Client requested short URL %s.', short_url)

    # 2- Get short link record from database
    short_link_dao = ShortLinkRedisDAO(**redis_config, prefix=app_prefix())
    try:
        short_link = short_link_dao.get(shortcode=shortcode)
    except ShortLinkNotFoundError:
        logger.info('Short link record not found in database. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND})
        return not_found

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 302.', extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS})
    return response_302(location=short_link.target)
