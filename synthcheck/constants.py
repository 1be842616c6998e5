DEFAULT_CHECK_ID = "https89serviceglidepage"
DEFAULT_URL = "https://89service.glide.page"
DEFAULT_SCREENSHOT_PATH = "screenshot.jpg"
DEFAULT_WAIT_UNTIL = "load"

# Responses at or above this status fail the check.
FAILURE_STATUS = 400
