# Log event codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
LINK_KEY_COLLISION = 'LINK_KEY_COLLISION'
QR_GENERATION_FAILED = 'QR_GENERATION_FAILED'
LINK_GENERATED = 'LINK_GENERATED'
