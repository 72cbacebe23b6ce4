import string

# Generated shortcodes: Base62 alphabet, fixed length
SHORTCODE_ALPHABET = string.ascii_letters + string.digits
SHORTCODE_LENGTH = 6

# Custom aliases: 1 to 15 alphanumeric characters (matched against the whole string)
ALIAS_PATTERN = r'[a-zA-Z0-9]{1,15}'

# Fallback link lifetime for non-positive or non-numeric durations
DEFAULT_DURATION_MINUTES = 30

# Public base URL used when building short URLs
DEFAULT_BASE_URL = 'http://localhost:3000'

# Registry backends
MEMORY_BACKEND = 'memory'
REDIS_BACKEND = 'redis'
SUPPORTED_BACKENDS = frozenset({MEMORY_BACKEND, REDIS_BACKEND})

# Application environment
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'
LOG_FORMAT_ENV = 'LOG_FORMAT'

# Local configuration overrides
BASE_URL_ENV = 'BASE_URL'
ACTIVE_BACKEND_ENV = 'ACTIVE_BACKEND'
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'

# AWS AppConfig identifiers
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'
