# Log event codes
MISSING_KEY = 'MISSING_KEY'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
