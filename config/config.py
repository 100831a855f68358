import os


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in {"1", "true", "on", "yes"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "conference-dev-secret"

    # DB settings
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "conference_db")

    # Outbound mail (registration QR codes)
    MAIL_HOST = os.environ.get("MAIL_HOST", "smtp.mailersend.net")
    MAIL_PORT = int(os.environ.get("MAIL_PORT", "587"))
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
    MAIL_SENDER = os.environ.get("MAIL_SENDER", MAIL_USERNAME)
    MAIL_USE_TLS = _flag("MAIL_USE_TLS", "1")

    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "uploads")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev helpers
    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

MAIL_CONFIG = {
    "host": Config.MAIL_HOST,
    "port": Config.MAIL_PORT,
    "username": Config.MAIL_USERNAME,
    "password": Config.MAIL_PASSWORD,
    "sender": Config.MAIL_SENDER,
    "use_tls": Config.MAIL_USE_TLS,
}
