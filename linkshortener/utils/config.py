"""Utility functions for application configuration management.

Two sources of configuration exist:

    - Environment variables configure link generation (base path, salt,
      minimum key length, alphabet, initial counter, QR options). They are
      parsed by `generator_settings()` into a frozen GeneratorSettings.

    - AWS AppConfig holds the data store connection details of each Lambda.
      The configuration JSON follows this structure:

        {
            "active_backend": "redis",
            "configs": {
                "generate_link": {
                    "redis": { ... }
                },
                "redirect_link": {
                    "redis": { ... }
                }
            }
        }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    generator_settings() -> GeneratorSettings
        Parse link generation settings from the environment.

    load_config(lambda_name: str) -> dict
        Load the data store configuration of a Lambda from AWS AppConfig.

Example:
    >>> from linkshortener.utils.config import generator_settings
    >>> os.environ['LINK_SALT'] = 'my_secret'
    >>> generator_settings().salt
    'my_secret'
"""

import os
import json
import logging
from dataclasses import dataclass

import boto3

from linkshortener.constants import ENV, Alphabet, QrPayload
from linkshortener.exceptions import ConfigError
from linkshortener.types import LambdaConfiguration
from linkshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


DEFAULT_BASE_PATH = '/redirect'
DEFAULT_MIN_LENGTH = 10


@dataclass(frozen=True)
class GeneratorSettings:
    """Link generation settings.

    Attributes:
        base_path (str):
            Path (or absolute URL) short URLs start with.
        salt (str):
            Hash-id salt.
        min_length (int):
            Minimum key length.
        alphabet (str):
            Hash-id alphabet.
        initial_counter (int):
            First counter value a generator issues.
        qr_payload (QrPayload):
            Whether QR codes carry the URL or only the key.
        qr_error_correction (str):
            QR error correction level (L, M, Q, H).
        qr_max_version (int):
            Largest QR version allowed.
    """

    base_path: str = DEFAULT_BASE_PATH
    salt: str = ''
    min_length: int = DEFAULT_MIN_LENGTH
    alphabet: str = Alphabet.LINK
    initial_counter: int = 0
    qr_payload: QrPayload = QrPayload.URL
    qr_error_correction: str = 'M'
    qr_max_version: int = 40


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f'Environment variable {name} must be an integer (given value: {raw!r}).') from e


def generator_settings() -> GeneratorSettings:
    """Parse link generation settings from environment variables.

    Unset variables fall back to GeneratorSettings defaults. Values are only
    type-checked here; the codec, generator and QR emitter validate ranges
    when they are constructed.

    Raises:
        ConfigError:
            If an integer variable is not an integer, or QR_PAYLOAD is
            neither 'url' nor 'key'.
    """
    raw_payload = os.environ.get(ENV.Qr.PAYLOAD) or QrPayload.URL
    try:
        qr_payload = QrPayload(raw_payload.lower())
    except ValueError as e:
        raise ConfigError(f"Environment variable {ENV.Qr.PAYLOAD} must be 'url' or 'key' (given value: {raw_payload!r}).") from e

    settings = GeneratorSettings(
        base_path=os.environ.get(ENV.Link.BASE_PATH) or DEFAULT_BASE_PATH,
        salt=os.environ.get(ENV.Link.SALT, ''),
        min_length=_int_from_env(ENV.Link.MIN_LENGTH, DEFAULT_MIN_LENGTH),
        alphabet=os.environ.get(ENV.Link.ALPHABET) or Alphabet.LINK,
        initial_counter=_int_from_env(ENV.Link.INITIAL_COUNTER, 0),
        qr_payload=qr_payload,
        qr_error_correction=(os.environ.get(ENV.Qr.ERROR_CORRECTION) or 'M').upper(),
        qr_max_version=_int_from_env(ENV.Qr.MAX_VERSION, 40),
    )
    logger.debug(
        'Loaded generator settings from environment.',
        extra={'basePath': settings.base_path, 'minLength': settings.min_length, 'qrPayload': str(settings.qr_payload)},
    )
    return settings


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'generate_link', 'redirect_link').

    Environment variables required:
        APPCONFIG_APP_ID       - AppConfig Application ID
        APPCONFIG_ENV_ID       - AppConfig Environment ID
        APPCONFIG_PROFILE_ID   - AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "generate_link" or "redirect_link").

    Returns:
        dict: {<active backend>: <backend config>} for the Lambda.

    Example:
        >>> app_config = load_config('generate_link')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    backend = config['active_backend']
    data = {backend: config['configs'][lambda_name][backend]}
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
