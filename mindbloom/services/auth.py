"""Authentication service for JWT and password handling."""

import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mindbloom.config import get_settings
from mindbloom.models.user import User

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Verified against when the email is unknown so both failure paths cost a bcrypt round
_DUMMY_HASH = pwd_context.hash("mindbloom-timing-equalizer")


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased."""
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: str) -> str:
    """Create a JWT access token."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": user_id,
        "iat": now,
        "exp": expire,
        "jti": uuid.uuid4().hex,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token.

    Returns None for anything that is not a well-formed, correctly signed,
    unexpired token carrying a subject and a token id.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not payload.get("sub") or not payload.get("jti"):
        return None
    return payload


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user or not user.password_hash:
        verify_password(password, _DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(
    db: Session,
    email: str,
    password: str | None,
    name: str | None = None,
    profile_image_url: str | None = None,
) -> User:
    """Create a new user. A None password makes a federated-only account."""
    hashed_password = get_password_hash(password) if password is not None else None
    user = User(
        email=normalize_email(email),
        password_hash=hashed_password,
        name=name,
        profile_image_url=profile_image_url,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_create_federated_user(
    db: Session,
    email: str,
    name: str | None,
    picture: str | None,
) -> User:
    """Find the local account for a federated identity, creating it on first sign-in.

    A missing profile picture is backfilled from the provider.
    """
    user = get_user_by_email(db, email)
    if user is None:
        try:
            return create_user(db, email, None, name=name, profile_image_url=picture)
        except IntegrityError:
            # A concurrent first sign-in created the account; use that one
            db.rollback()
            user = get_user_by_email(db, email)
            if user is None:
                raise

    if not user.profile_image_url and picture:
        user.profile_image_url = picture
        db.commit()
        db.refresh(user)
    return user
