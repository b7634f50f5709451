from urlshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from urlshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from urlshortener.utils.shortener import generate_shortcode
from urlshortener.utils.validators import is_valid_url, is_valid_shortcode
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'is_valid_url',
    'is_valid_shortcode',
    'initialize_logging',
]
