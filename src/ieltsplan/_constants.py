"""Internal constants shared across the library."""

import re

STORAGE_KEY = "ieltsplan:state"

#: Rolling expiry applied on every write (30 days).
STATE_TTL_SECONDS = 60 * 60 * 24 * 30

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

RESOURCE_CATEGORIES: tuple[str, ...] = ("vocabulary", "listening", "reading", "writing", "speaking")

SERIES_LIST_KEY = "seriesList"
CHILL_ZONE_KEY = "chillZone"

# ------------------------------------------------------------------
# Planner progress steps
# ------------------------------------------------------------------

VALID_PROGRESS_STEPS: tuple[int, ...] = (0, 25, 50, 75, 100)

# ------------------------------------------------------------------
# Gemini completion upstream
# ------------------------------------------------------------------

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.5-flash"

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
