# Log events & error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
