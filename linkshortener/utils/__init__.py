from linkshortener.utils.config import app_env, app_name, app_prefix, load_config
from linkshortener.utils.helpers import utcnow, get_short_url, require_environment
from linkshortener.utils.shortener import ShortcodeGenerator, generate_shortcode, random_source, sequential_source
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'ShortcodeGenerator',
    'generate_shortcode',
    'random_source',
    'sequential_source',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'utcnow',
    'get_short_url',
    'require_environment',
    'initialize_logging',
]
