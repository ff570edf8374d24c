import os

SECRET_KEY = os.environ.get("SECRET_KEY", "CHANGE_ME_SESSION_SECRET")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

SESSION_COOKIE_NAME = os.environ.get("SESSION_COOKIE_NAME", "session_token")
SESSION_COOKIE_SECURE = os.environ.get("SESSION_COOKIE_SECURE", "false").strip().lower() in {"1", "true", "yes", "on"}

BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./tasklist.db")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
TITLE_MAX_LENGTH = 200

# SQLite/Postgres BIGINT upper bound; larger ids or offsets cannot exist in the store
MAX_ROW_ID = 2**63 - 1
