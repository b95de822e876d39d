from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import AppError, AuthenticationError, NotFoundError, StoreError, ValidationError
from app.core.security import Identity, create_access_token, hash_password
from app.dao.user_dao import UserDAO, user_dao
from app.models.enums import UserRole
from app.schemas.auth_schemas import RegisterRequest, UserPublic, UserProfile
import structlog

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Registration, login and token issuing."""

    def __init__(self, user_dao: UserDAO = user_dao):
        self.user_dao = user_dao

    async def register(self, db: AsyncSession, request: RegisterRequest) -> UserPublic:
        """Create a user account with a hashed password. Never returns the hash."""
        try:
            if await self.user_dao.get_by_username(db, request.username):
                raise ValidationError("Username already exists")
            if await self.user_dao.get_by_email(db, request.email):
                raise ValidationError("Email already registered")

            user_data = request.model_dump(exclude={"password"})
            user_data["password"] = hash_password(request.password)
            user_data["role"] = UserRole.USER

            user = await self.user_dao.create(db, obj_in=user_data)
            logger.info("User registered", user_id=user.id, username=user.username)
            return UserPublic.model_validate(user)

        except AppError:
            raise
        except IntegrityError:
            # Lost a race with a concurrent registration
            raise ValidationError("Username or email already exists")
        except SQLAlchemyError as e:
            logger.error("Error registering user", username=request.username, error=str(e))
            raise StoreError(str(e))

    async def login(self, db: AsyncSession, email: str, password: str) -> str:
        """
        Check credentials and issue a signed access token.

        Unknown email, wrong password and deactivated accounts all fail with the
        same message so callers cannot probe which emails are registered.
        """
        try:
            user = await self.user_dao.authenticate_user(db, email, password)
        except SQLAlchemyError as e:
            logger.error("Error during login", error=str(e))
            raise StoreError(str(e))

        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(user.id, user.role)
        logger.info("User logged in", user_id=user.id, role=user.role.value)
        return token

    async def get_profile(self, db: AsyncSession, identity: Identity) -> UserProfile:
        try:
            user = await self.user_dao.get_by_id(db, identity.user_id)
        except SQLAlchemyError as e:
            logger.error("Error loading profile", user_id=identity.user_id, error=str(e))
            raise StoreError(str(e))

        if not user:
            raise NotFoundError("User not found")
        return UserProfile.model_validate(user)


auth_service = AuthService()
