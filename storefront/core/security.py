"""Admin credential checking and token issuance."""

import hmac
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from ..exceptions import AuthenticationError, ConfigurationError, ValidationError

ADMIN_ROLE = "admin"

_DURATION = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expires_in(value: str) -> timedelta:
    """Parse ``24h``, ``30m``, ``7d``, ``45s`` or a plain number of seconds."""
    match = _DURATION.match(value or "")
    if not match:
        raise ConfigurationError(f"Invalid token expiry: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


class CredentialVerifier:
    """Checks submitted credentials against one configured admin account."""

    def __init__(self, expected_email: Optional[str], expected_password: Optional[str]):
        self.expected_email = expected_email
        self.expected_password = expected_password

    @property
    def configured(self) -> bool:
        return bool(self.expected_email and self.expected_password)

    def verify(self, email: str, password: str) -> bool:
        """Constant time comparison of both values."""
        if not self.configured:
            return False
        email_ok = hmac.compare_digest(email.encode(), self.expected_email.encode())
        password_ok = hmac.compare_digest(password.encode(), self.expected_password.encode())
        return email_ok and password_ok


def create_admin_token(
    email: str,
    secret: str,
    expires_in: str = "24h",
    algorithm: str = "HS256",
) -> str:
    """Create a signed JWT carrying ``{email, role: "admin"}``."""
    to_encode = {
        "email": email,
        "role": ADMIN_ROLE,
        "exp": datetime.now(timezone.utc) + parse_expires_in(expires_in),
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[dict[str, Any]]:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None


def login_admin(
    verifier: CredentialVerifier,
    email: Optional[str],
    password: Optional[str],
    secret: Optional[str],
    expires_in: str = "24h",
    algorithm: str = "HS256",
) -> str:
    """
    Check admin credentials and issue a token.

    Raises:
        ValidationError: if email or password is missing
        ConfigurationError: if the admin account or signing secret is not configured
        AuthenticationError: if the credentials do not match
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    if not verifier.configured or not secret:
        raise ConfigurationError("Server configuration error - missing environment variables")

    if not verifier.verify(email, password):
        raise AuthenticationError("Invalid credentials")

    return create_admin_token(verifier.expected_email, secret, expires_in, algorithm)
