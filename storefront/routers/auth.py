"""
Admin login endpoint.
"""
import logging

from fastapi import APIRouter, Depends

from ..config.settings import Settings, get_settings
from ..core.security import CredentialVerifier, login_admin
from ..exceptions import StorageError, StorefrontError
from ..schemas.auth import AdminLoginData, AdminLoginRequest, AdminLoginResponse, AdminProfile
from ..utils.dependencies import get_credential_verifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/AdminLogin", response_model=AdminLoginResponse)
async def admin_login(
    request: AdminLoginRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    settings: Settings = Depends(get_settings),
):
    """Exchange the configured admin credentials for a signed token"""
    try:
        token = login_admin(
            verifier,
            request.email,
            request.password,
            settings.jwt_secret,
            expires_in=settings.jwt_expires_in,
            algorithm=settings.jwt_algorithm,
        )
    except StorefrontError as e:
        logger.warning(f"Admin login rejected: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Admin login failed: {str(e)}")
        raise StorageError("Server error during login", detail=str(e))

    logger.info("Admin logged in")
    return AdminLoginResponse(
        message="Login successful",
        data=AdminLoginData(token=token, admin=AdminProfile(email=verifier.expected_email)),
    )
