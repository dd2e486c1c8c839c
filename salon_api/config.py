import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./salon.db")

# JWT - access and refresh tokens are signed with distinct secrets
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    import warnings

    warnings.warn(
        "JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    JWT_SECRET = "INSECURE-DEV-ACCESS-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET")
if not REFRESH_TOKEN_SECRET:
    import warnings

    warnings.warn(
        "REFRESH_TOKEN_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    REFRESH_TOKEN_SECRET = "INSECURE-DEV-REFRESH-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# Frontend base URL, used to build public share links
APP_URL = os.getenv("APP_URL", "http://localhost:3000")

# Login throttling
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "10"))
LOGIN_RATE_WINDOW_SECONDS = int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"))

# AI try-on processing
# When false, processing runs as a FastAPI background task instead of an ARQ job
TRYON_USE_QUEUE = os.getenv("TRYON_USE_QUEUE", "true").lower() == "true"
FREE_WEEKLY_TRYONS = int(os.getenv("FREE_WEEKLY_TRYONS", "5"))
IMAGE_GENERATION_URL = os.getenv("IMAGE_GENERATION_URL")
IMAGE_GENERATION_API_KEY = os.getenv("IMAGE_GENERATION_API_KEY")
IMAGE_GENERATION_MODEL = os.getenv("IMAGE_GENERATION_MODEL", "gemini-2.5-flash")
IMAGE_GENERATION_COST = float(os.getenv("IMAGE_GENERATION_COST", "0.039"))
IMAGE_GENERATION_TIMEOUT = float(os.getenv("IMAGE_GENERATION_TIMEOUT", "60"))
PLACEHOLDER_RESULT_IMAGE_URL = os.getenv(
    "PLACEHOLDER_RESULT_IMAGE_URL", "https://placeholder-result-image.com/result.jpg"
)

# Booking availability defaults (used when a salon has no hours for the day)
BOOKING_DAY_START = os.getenv("BOOKING_DAY_START", "09:00")
BOOKING_DAY_END = os.getenv("BOOKING_DAY_END", "18:00")
BOOKING_SLOT_MINUTES = int(os.getenv("BOOKING_SLOT_MINUTES", "30"))

# Nearby search
DEFAULT_SEARCH_RADIUS_KM = float(os.getenv("DEFAULT_SEARCH_RADIUS_KM", "10"))

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "LKR")
