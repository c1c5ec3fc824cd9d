import string
from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Link mapping TTL duration (data retention period) (1 year in seconds)
    ONE_YEAR = 31_536_000  # 60 * 60 * 24 * 365


class Alphabet:
    """Alphabets accepted by HashIdCodec."""

    # Classic hashids alphabet (62 characters, order matters for the output)
    DEFAULT = string.ascii_lowercase + string.ascii_uppercase + '1234567890'
    # Case-insensitive alphabet used by LinkGenerator (36 characters)
    LINK = string.ascii_lowercase + string.digits


class HashIdParameters:
    """Fixed parameters of the hash-id alphabet partitioning."""

    SEPARATORS = 'cfhistuCFHISTU'
    SEPARATOR_RATIO = 3.5
    GUARD_RATIO = 12
    MIN_ALPHABET_LENGTH = 16
    # Numeric width of encodable values (unsigned 64-bit)
    MAX_VALUE = 2**64 - 1


class QrPayload(StrEnum):
    """What a generated QR code carries."""

    URL = 'url'
    KEY = 'key'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class Link(StrEnum):
        BASE_PATH = 'LINK_BASE_PATH'
        SALT = 'LINK_SALT'
        MIN_LENGTH = 'LINK_MIN_LENGTH'
        ALPHABET = 'LINK_ALPHABET'
        INITIAL_COUNTER = 'LINK_INITIAL_COUNTER'

    class Qr(StrEnum):
        PAYLOAD = 'QR_PAYLOAD'
        ERROR_CORRECTION = 'QR_ERROR_CORRECTION'
        MAX_VERSION = 'QR_MAX_VERSION'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
