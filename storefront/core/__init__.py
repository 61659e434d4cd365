from .security import (
    ADMIN_ROLE,
    CredentialVerifier,
    create_admin_token,
    decode_token,
    login_admin,
    parse_expires_in
)

__all__ = [
    "ADMIN_ROLE",
    "CredentialVerifier",
    "create_admin_token",
    "decode_token",
    "login_admin",
    "parse_expires_in"
]
