"""Application-level exceptions raised by the mapping service and its entry points.

Every exception carries a stable `error_code` so callers can report failures
without matching on message strings.

Example:
    >>> from ephemurl.exceptions import NotFoundError
    >>> try:
    ...     raise NotFoundError("Short URL 'abc12' not found or expired.")
    ... except NotFoundError as e:
    ...     e.error_code
    'mapping:not_found'
"""


class EphemurlError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:ephemurl_error'


class MappingError(EphemurlError):
    """Base exception for mapping lifecycle errors."""

    error_code = 'mapping:mapping_error'


class InvalidInputError(MappingError):
    """Raised when a URL, owner id or pagination argument is malformed."""

    error_code = 'mapping:invalid_input'


class NotFoundError(MappingError):
    """Raised when no live mapping exists for a short code."""

    error_code = 'mapping:not_found'


class UnauthorizedError(MappingError):
    """Raised when the caller does not own the requested mapping."""

    error_code = 'mapping:unauthorized'


class ExhaustedRetriesError(MappingError):
    """Raised when no free short code was found within the attempt budget."""

    error_code = 'mapping:exhausted_retries'


class ConfigurationError(EphemurlError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
