"""Session-cookie authentication."""

from .middleware import redirect_if_auth, require_auth
from .passwords import hash_password, verify_password

__all__ = ["hash_password", "redirect_if_auth", "require_auth", "verify_password"]
