import os

from .config import DB_CONFIG, MAIL_CONFIG, Config

# No fallback; create_app refuses to start without a key
SECRET_KEY = os.getenv("SECRET_KEY", "")

DB_CONFIG = dict(DB_CONFIG)
MAIL_CONFIG = dict(MAIL_CONFIG)

UPLOAD_FOLDER = Config.UPLOAD_FOLDER
MAX_CONTENT_LENGTH = Config.MAX_CONTENT_LENGTH
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
