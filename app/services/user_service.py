"""User Service - Registration, login and identity lookups"""

import logging
from typing import Optional, Tuple
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User
from app.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
DUPLICATE_USER = "User already exists with this email, ID, or driver's license"

REQUIRED_REGISTRATION_FIELDS = (
    "name", "id_number", "phone", "dl_number", "dl_expire_date", "email", "password",
)


class UserService:
    """Service layer for identity and authentication"""

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            db: Database session
            user_id: User ID

        Returns:
            User or None if not found
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_id_number(db: AsyncSession, id_number: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id_number == id_number))
        return result.scalar_one_or_none()

    @staticmethod
    async def find_by_unique_fields(
        db: AsyncSession,
        email: str,
        id_number: str,
        dl_number: str,
    ) -> Optional[User]:
        """Return any user that already holds one of the unique identifiers."""
        result = await db.execute(
            select(User).where(
                or_(
                    User.email == email,
                    User.id_number == id_number,
                    User.dl_number == dl_number,
                )
            ).limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def register(db: AsyncSession, data: RegisterRequest) -> Tuple[User, str]:
        """
        Create a user and sign a session token for them.

        Raises:
            ValidationError: a field is missing or the email is malformed
            ConflictError: email, ID number or license number already registered
        """
        if any(not getattr(data, field) for field in REQUIRED_REGISTRATION_FIELDS):
            raise ValidationError("Please add all fields")

        # Stored lowercased so uniqueness ignores letter case
        try:
            email = validate_email(data.email.strip(), check_deliverability=False).normalized.lower()
        except EmailNotValidError:
            logger.info("Registration rejected: invalid email format")
            raise ValidationError("Invalid email format")

        id_number = data.id_number.strip()
        dl_number = data.dl_number.strip()

        existing = await UserService.find_by_unique_fields(db, email, id_number, dl_number)
        if existing:
            logger.info("Registration rejected: duplicate identity", extra={"id_number": id_number})
            raise ConflictError(DUPLICATE_USER)

        user = User(
            name=data.name.strip(),
            id_number=id_number,
            phone=data.phone.strip(),
            dl_number=dl_number,
            dl_expire_date=data.dl_expire_date,
            email=email,
            hashed_password=get_password_hash(data.password),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same identity
            await db.rollback()
            raise ConflictError(DUPLICATE_USER)
        await db.refresh(user)

        logger.info("User registered", extra={"user_id": str(user.id)})
        return user, create_access_token(str(user.id))

    @staticmethod
    async def authenticate_user(db: AsyncSession, id_number: str, password: str) -> Optional[User]:
        """
        Authenticate a user by ID number and password.

        Returns:
            User if authentication successful, None otherwise
        """
        user = await UserService.get_user_by_id_number(db, id_number)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    async def login(db: AsyncSession, id_number: Optional[str], password: Optional[str]) -> str:
        """
        Exchange credentials for a session token.

        Unknown ID and wrong password fail with the same message.
        """
        if not id_number or not password:
            raise ValidationError("Please provide ID number and password")

        user = await UserService.authenticate_user(db, id_number.strip(), password)
        if not user:
            logger.warning("Login failed", extra={"id_number": id_number})
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return create_access_token(str(user.id))

    @staticmethod
    async def get_current_user(db: AsyncSession, user_id: UUID) -> User:
        """Resolve an authenticated identity to its user record."""
        user = await UserService.get_user_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
