"""Network configuration constants for the portal."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
DEFAULT_API_BASE_URL: str = "http://localhost:5000/api"
REQUEST_TIMEOUT_SECONDS: float = 10.0
SESSION_COOKIE_NAME: str = "portalqt_session"
SESSION_COOKIE_MAX_AGE: int = 60 * 60 * 6
