import os

from .config import DB_CONFIG, MAIL_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = dict(DB_CONFIG)
MAIL_CONFIG = dict(MAIL_CONFIG)

UPLOAD_FOLDER = Config.UPLOAD_FOLDER
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo tracks and sessions on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
