import json
import logging

from linkshortener.dao.redis import LinkRedisDAO
from linkshortener.dao.exceptions import LinkNotFoundError
from linkshortener.generator import LinkGenerator
from linkshortener.service import LinkService
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils import app_prefix, generator_settings, guarantee_500_response, load_config
from linkshortener.lambdas.redirect_link.constants import MISSING_KEY, LINK_NOT_FOUND, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


def response_500(message: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'body': json.dumps(body),
    }


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure:
    - Step 1: Extract key from request path
    - Step 2: Resolve the key (undecodable keys never reach Redis)
    - Step 3: Redirect client to target URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing key in path parameters
        404: Not found
            message: key was never issued or has expired
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'key': 'vq5ejng0p6'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_link')
    except KeyError:
        logger.exception('Failed to load AppConfig for redirect link function. Responding with 500.')
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract key from request's path
    key = (event.get('pathParameters') or {}).get('key')
    if not key:
        logger.info('Missing "key" in path. Responding with 400.', extra={'event': MISSING_KEY})
        return response_400(message="missing 'key' in path", error_code=MISSING_KEY)

    # 2- Resolve the key
    service = LinkService(LinkGenerator.from_settings(generator_settings()), LinkRedisDAO(**redis_config, prefix=app_prefix()))
    try:
        target_url = service.resolve(key)
    except LinkNotFoundError:
        logger.info('Link not found. Responding with 404.', extra={'key': key, 'event': LINK_NOT_FOUND})
        return response_404(message=f"link '{key}' doesn't exist", error_code=LINK_NOT_FOUND)

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 307.', extra={'key': key, 'event': REDIRECT_SUCCESS})
    return response_307(location=target_url)
