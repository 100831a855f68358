"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MYSQL_DUPLICATE_KEY = 1062
MYSQL_FOREIGN_KEY_MISSING = 1452
IDENTITY_TOKEN_PREFIX = "CONF"
IDENTITY_TOKEN_HEX_LENGTH = 40
REGISTRATION_MAIL_SUBJECT = "Your Conference Registration QR Code"
NOTIFICATION_WORKERS = 2
# Column limits from database/schema.sql
MYSQL_INT_MAX = 2147483647
MAX_TEXT_LENGTH = 255
# tracks.description is TEXT (65535 bytes, up to 4 bytes per utf8mb4 char)
MAX_DESCRIPTION_LENGTH = 16383
