from ephemurl.utils.config import app_env, app_name, app_prefix, load_config
from ephemurl.utils.helpers import is_valid_url, utc_now, ttl_seconds, get_short_url, require_environment
from ephemurl.utils.shortener import generate_shortcode
from ephemurl.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'is_valid_url',
    'utc_now',
    'ttl_seconds',
    'get_short_url',
    'require_environment',
    'initialize_logging',
]
