"""Application-wide constants."""
import re


class Role:
    """User role constants. Self-registered accounts are always admins."""
    ADMIN = "admin"


# Supported content languages for bilingual fields
LANGUAGES = ("pt", "en")
DEFAULT_LANGUAGE = "pt"

# Validation patterns
CATEGORY_ID_PATTERN = re.compile(r"^[a-z0-9-]+$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
URL_PATTERN = re.compile(r"^https?://.*")
PASSWORD_MIN_LENGTH = 6

# Pagination
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# The site configuration is a single row under this key
SITE_CONFIG_ID = "default"
