from linkshortener.utils.config import app_env, app_name, app_prefix, generator_settings, load_config, GeneratorSettings
from linkshortener.utils.helpers import base_url, require_environment, guarantee_500_response
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'generator_settings',
    'load_config',
    'GeneratorSettings',
    'base_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
