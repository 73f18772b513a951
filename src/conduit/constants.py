"""Global constants for Conduit.

This module defines constants used throughout the application to avoid
hardcoded strings and make the codebase more maintainable.
"""

# Session cookie
SESSION_COOKIE_NAME = "session"
SESSION_TTL_SECONDS = 7 * 24 * 60 * 60
FLASH_SESSION_TTL_SECONDS = 5 * 60

# Event types
EVENT_USER_REGISTERED = "user.registered"

# Event identifiers
EVENT_ID_PREFIX = "evt_"
USER_ID_PREFIX = "user_"

# Admin area paths
ADMIN_PREFIX = "/admin"
LOGIN_PATH = "/admin/login"
REGISTER_PATH = "/admin/register"
DASHBOARD_PATH = "/admin/dashboard"

MIN_PASSWORD_LENGTH = 8
