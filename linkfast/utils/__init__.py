from linkfast.utils.config import app_env, app_name, project_root, app_prefix, load_config
from linkfast.utils.helpers import (
    normalize_url,
    is_valid_url,
    is_valid_shortcode,
    base_url,
    get_short_url,
    guarantee_500_response,
)
from linkfast.utils.shortener import generate_shortcode
from linkfast.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'normalize_url',
    'is_valid_url',
    'is_valid_shortcode',
    'base_url',
    'get_short_url',
    'guarantee_500_response',
    'initialize_logging',
]
