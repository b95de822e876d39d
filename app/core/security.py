from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.models.enums import UserRole
import structlog

logger = structlog.get_logger()

security = HTTPBearer(auto_error=False)

# bcrypt rejects longer secrets
PASSWORD_MAX_BYTES = 72


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a bearer token."""
    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def hash_password(password: str) -> str:
    """Generate a bcrypt hash for a password."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: str, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode = {"userId": user_id, "role": UserRole(role).value, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Identity:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning("JWT validation error", error=str(e))
        raise AuthenticationError("Not authorized, token invalid or expired")

    user_id = payload.get("userId")
    if not user_id:
        raise AuthenticationError("Token missing userId")
    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        raise AuthenticationError("Token carries an unknown role")
    return Identity(user_id=user_id, role=role)


async def protect(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Require a valid bearer token and attach the caller's identity to the request."""
    if credentials is None:
        raise AuthenticationError("Not authorized, no token")
    identity = verify_token(credentials.credentials)
    request.state.identity = identity
    return identity


def authorize(*allowed_roles: UserRole):
    """
    Build a dependency that lets through only callers whose role is in
    ``allowed_roles``. Implies ``protect``.
    """
    async def check_role(identity: Identity = Depends(protect)) -> Identity:
        if identity.role not in allowed_roles:
            logger.warning(
                "Role not allowed",
                user_id=identity.user_id,
                role=identity.role.value,
                allowed=[r.value for r in allowed_roles],
            )
            raise AuthorizationError(f"Role '{identity.role.value}' is not allowed to access this resource")
        return identity

    return check_role
