# Log events & error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_LINK_NOT_FOUND = 'SHORT_LINK_NOT_FOUND'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
