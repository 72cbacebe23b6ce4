"""Application-level exceptions.

Every exception carries an `error_code` class attribute so callers at the
presentation boundary can translate failures without matching on messages.

Classes:
    LinkShortenerError:
        Base exception for all application-specific errors.

    ShortenError:
        Base for user input errors raised while shortening a URL.
        (InvalidURLError, InvalidAliasError, AliasTakenError)

    RedirectError:
        Base for errors raised while resolving a shortcode.
        (ShortURLExpiredError)

    InternalError:
        Base for unexpected failures that are not caused by user input.
        (ShortcodeGenerationError)

    ConfigurationError:
        Base for configuration errors.
        (MissingEnvironmentVariableError, BadConfigurationError)

NOTE:
    A missing shortcode on the redirect path is reported with
    `linkshortener.dao.exceptions.ShortURLNotFoundError`.
"""


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class ShortenError(LinkShortenerError):
    """Base exception for invalid shorten requests."""

    error_code = 'shorten:shorten_error'


class InvalidURLError(ShortenError):
    """Raised when the target is not an absolute URL."""

    error_code = 'shorten:invalid_url'


class InvalidAliasError(ShortenError):
    """Raised when a custom alias is not 1-15 alphanumeric characters."""

    error_code = 'shorten:invalid_alias'


class AliasTakenError(ShortenError):
    """Raised when a custom alias is already registered."""

    error_code = 'shorten:alias_taken'


class RedirectError(LinkShortenerError):
    """Base exception for failed redirects."""

    error_code = 'redirect:redirect_error'


class ShortURLExpiredError(RedirectError):
    """Raised when a short URL is resolved after its expiration time."""

    error_code = 'redirect:expired'


class InternalError(LinkShortenerError):
    """Base exception for unexpected internal failures."""

    error_code = 'internal:internal_error'


class ShortcodeGenerationError(InternalError):
    """Raised when no unused shortcode could be allocated."""

    error_code = 'internal:shortcode_generation'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
