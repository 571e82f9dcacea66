"""Assessment-related constants shared across the engine and the API layer."""

PERFECT_THRESHOLD_PERCENT: float = 100.0
GREAT_THRESHOLD_PERCENT: float = 80.0
GOOD_THRESHOLD_PERCENT: float = 60.0

SESSION_COOKIE_NAME: str = "assessment_session"
SESSION_COOKIE_MAX_AGE_SECONDS: int = 60 * 60 * 24
USER_ID_HEADER: str = "X-User-Id"
MAX_ACTIVE_SESSIONS: int = 1000
