import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse, LambdaConfiguration
from urlshortener.constants import Shortcode
from urlshortener.exceptions import ConfigurationError, BadConfigurationError
from urlshortener.models import ShortLinkModel
from urlshortener.dao.redis import ShortLinkRedisDAO
from urlshortener.dao.exceptions import ShortLinkAlreadyExistsError
from urlshortener.utils import generate_shortcode, load_config, get_short_url, app_prefix, is_valid_url
from urlshortener.utils.validators import MAX_SHORTCODE_LENGTH
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_201, response_400, response_500
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    SHORTCODE_COLLISION,
    CONFIGURATION_ERROR,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def shortcode_settings(app_config: LambdaConfiguration) -> tuple[str, int]:
    """Read (salt, length) from the optional `shortcode` section, falling back to defaults.

    Raises:
        BadConfigurationError: If the salt is empty or the length is outside
            1..MAX_SHORTCODE_LENGTH (the redirect handler rejects longer codes).
    """
    section = app_config.get('shortcode') or {}
    salt = section.get('salt', Shortcode.SALT)
    if not isinstance(salt, str) or not salt:
        raise BadConfigurationError('Shortcode salt must be a non-empty string.')

    try:
        length = int(section.get('length', Shortcode.LENGTH))
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"Shortcode length must be an integer (given value: {section.get('length')!r}).") from e
    if not 1 <= length <= MAX_SHORTCODE_LENGTH:
        raise BadConfigurationError(f'Shortcode length must be between 1 and {MAX_SHORTCODE_LENGTH} (given value: {length}).')
    return salt, length


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Validate the original URL
    - Step 3: Generate shortcode for new link (retry on collision)
    - Step 4: Store shortcode and target URL mapping in database (via DAO)
    - Step 5: Respond to user with 201 created

    HTTP responses:
        201: Successful URL shortening
            message: success message
            target_url: original url (provided in request)
            short_url: newly generated short url
            shortcode: newly generated shortcode
        400: Bad client request
            message: cause of bad request (invalid JSON, missing or invalid target_url)
        500: Internal server error
            message: the server experienced an internal error

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['short_url']
        'http://localhost:3000/Gh71WPT'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        salt, length = shortcode_settings(app_config)
    except (FileNotFoundError, ConfigurationError):
        logger.exception('Failed to load configuration for shorten URL function. Responding with 500.')
        return response_500(error_code=CONFIGURATION_ERROR)
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('target_url')
    if not target_url:
        logger.info("Missing 'target_url' in JSON body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 2- Validate original URL
    valid, reason = is_valid_url(target_url)
    if not valid:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL, 'reason': reason})
        return response_400(message=reason, error_code=INVALID_TARGET_URL)

    # 3/4- Generate shortcode and store the mapping; a taken shortcode is never
    #      overwritten, so move on to the next counter value instead
    short_link_dao = ShortLinkRedisDAO(**redis_config, prefix=app_prefix())
    for attempt in range(1, Shortcode.MAX_ATTEMPTS + 1):
        counter = short_link_dao.count(increment=True)
        shortcode = generate_shortcode(counter, salt=salt, length=length)
        try:
            short_link_dao.insert(short_link=ShortLinkModel(target=target_url, shortcode=shortcode))
        except ShortLinkAlreadyExistsError:
            logger.warning(
                'Shortcode collision. Retrying with next counter value.',
                extra={'shortcode': shortcode, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
            )
        else:
            break
    else:
        logger.error(
            'Could not allocate a unique shortcode. Responding with 500.',
            extra={'attempts': Shortcode.MAX_ATTEMPTS, 'event': SHORTCODE_COLLISION},
        )
        return response_500(message='could not allocate a unique shortcode', error_code=SHORTCODE_COLLISION)

    # 5- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info('Shortened target URL. Responding with 201.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_201(
        {
            'message': f'Successfully shortened {target_url} to {short_url}',
            'target_url': target_url,
            'short_url': short_url,
            'shortcode': shortcode,
        }
    )
