# Logging event codes
INVALID_JSON = 'INVALID_JSON'
INVALID_URL = 'INVALID_URL'
SHORTCODE_GENERATION_FAILED = 'SHORTCODE_GENERATION_FAILED'
PERSISTENCE_FAILED = 'PERSISTENCE_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
SHORTEN_DUPLICATE = 'SHORTEN_DUPLICATE'
