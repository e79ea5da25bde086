from datetime import timedelta

# Default mapping lifetime, also the amount added by each renewal
DEFAULT_LINK_LIFETIME = timedelta(hours=48)

# Short code generation
DEFAULT_SHORTCODE_LENGTH = 5
DEFAULT_MAX_CODE_ATTEMPTS = 10

# Listing
DEFAULT_PAGE_SIZE = 10

# Application environment
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Redis connection details
REDIS_URL_ENV = 'REDIS_URL'
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # noqa: S105
REDIS_SOCKET_TIMEOUT_ENV = 'REDIS_SOCKET_TIMEOUT'

# Mapping service tuning
LINK_LIFETIME_HOURS_ENV = 'EPHEMURL_LINK_LIFETIME_HOURS'
SHORTCODE_LENGTH_ENV = 'EPHEMURL_SHORTCODE_LENGTH'
MAX_CODE_ATTEMPTS_ENV = 'EPHEMURL_MAX_CODE_ATTEMPTS'
BASE_URL_ENV = 'EPHEMURL_BASE_URL'
