import json
import logging
from dataclasses import replace

from linkshortener.dao.redis import LinkRedisDAO
from linkshortener.dao.exceptions import LinkAlreadyExistsError
from linkshortener.exceptions import QrGenerationError
from linkshortener.generator import LinkGenerator
from linkshortener.service import LinkService
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils import app_prefix, base_url, generator_settings, guarantee_500_response, load_config
from linkshortener.lambdas.generate_link.constants import (
    INVALID_JSON_BODY,
    MISSING_TARGET_URL,
    LINK_KEY_COLLISION,
    QR_GENERATION_FAILED,
    LINK_GENERATED,
)


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


def response_200(body: dict) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def public_base_path(base_path: str, event: LambdaEvent) -> str:
    """Anchor a relative base path (e.g. '/redirect') to the API's public URL."""
    if base_path.startswith(('http://', 'https://')):
        return base_path
    return f'{base_url(event).rstrip("/")}/{base_path.lstrip("/")}'


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to generate short links

    This Lambda handler follows this procedure:
    - Step 1: Extract target URL from request body
    - Step 2: Reserve a counter value with an atomic INCR in Redis
    - Step 3: Issue the link and store the key to target mapping
    - Step 4: Render the short URL as an SVG QR code
    - Step 5: Respond with the key, short URL and QR image

    HTTP responses:
        200: Link generated
            key: issued key
            url: short url
            target_url: original url (provided in request)
            image: SVG markup of the QR code (null if rendering failed)
        400: Bad client request
            message: invalid JSON or missing 'url'
        500: Internal server error
            message: configuration, data store or key collision failure

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse: API Gateway-compatible response.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
    """
    # 0- Get application's config
    try:
        app_config = load_config('generate_link')
    except KeyError:
        logger.exception('Failed to load AppConfig for generate link function. Responding with 500.')
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    settings = generator_settings()

    # 1- Extract target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    target_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not target_url or not isinstance(target_url, str):
        logger.info("Missing 'url' in body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_TARGET_URL)

    # 2- Reserve a counter value shared by every function instance
    dao = LinkRedisDAO(**redis_config, prefix=app_prefix())
    reserved = dao.count(increment=True)
    settings = replace(settings, base_path=public_base_path(settings.base_path, event))
    generator = LinkGenerator.from_settings(settings, initial_counter=settings.initial_counter + reserved - 1)

    # 3- Issue the link and store the mapping
    service = LinkService(generator, dao)
    try:
        link = service.shorten(target_url)
    except LinkAlreadyExistsError:
        logger.exception(
            'Issued key already exists in database. Responding with 500.',
            extra={'counter': generator.counter - 1, 'event': LINK_KEY_COLLISION},
        )
        return response_500(message='key collision')

    # 4- Render the QR code
    try:
        image = generator.render_qr(link).content.decode('utf-8')
    except QrGenerationError:
        logger.warning(
            'QR rendering failed, responding without image.',
            extra={'key': link.key, 'event': QR_GENERATION_FAILED},
        )
        image = None

    # 5- Respond with the new link
    logger.info('Generated new link. Responding with 200.', extra={'key': link.key, 'url': link.url, 'event': LINK_GENERATED})
    return response_200(
        {
            'message': f'Successfully shortened {target_url} to {link.url}',
            'key': link.key,
            'url': link.url,
            'target_url': target_url,
            'image': image,
        }
    )
