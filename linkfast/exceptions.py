class LinkFastError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkfast_error'


class ConfigurationError(LinkFastError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ServiceError(LinkFastError):
    """Base exception for failures surfaced by the shorten and redirect services.

    `public_message` is safe to show to API clients; the exception message itself
    may carry internal detail and is only meant for logs.
    """

    error_code = 'service:service_error'
    public_message = 'server error'


class InvalidURLError(ServiceError):
    """Raised when a URL is malformed after normalization."""

    error_code = 'service:invalid_url_error'
    public_message = 'invalid url format'


class ShortcodeGenerationError(ServiceError):
    """Raised when a unique short code can't be generated."""

    error_code = 'service:shortcode_generation_error'
    public_message = 'server error'


class ShortcodeGenerationExhaustedError(ShortcodeGenerationError):
    """Raised when every generation attempt collided with an existing short code."""

    error_code = 'service:shortcode_generation_exhausted_error'


class PersistenceError(ServiceError):
    """Raised when a new URL record can't be written to the data store."""

    error_code = 'service:persistence_error'
    public_message = 'failed to save url'


class ShortcodeNotFoundError(ServiceError):
    """Raised when a short code has no URL record."""

    error_code = 'service:shortcode_not_found_error'
    public_message = 'not found'
