class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:link_shortener_error'


class ConfigError(LinkShortenerError):
    """Raised when a codec, generator or emitter is configured with invalid parameters."""

    error_code = 'config:config_error'


class DecodeError(LinkShortenerError):
    """Raised when a string was not produced by the current codec configuration."""

    error_code = 'codec:decode_error'


class CounterOverflowError(LinkShortenerError):
    """Raised when the generator counter exceeds the encodable numeric width."""

    error_code = 'generator:counter_overflow_error'


class QrGenerationError(LinkShortenerError):
    """Raised when a payload cannot be rendered as a QR code."""

    error_code = 'qr:qr_generation_error'
