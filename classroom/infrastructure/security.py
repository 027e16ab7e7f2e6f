"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from classroom.config import get_settings

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(hashed_password: str, is_approved: bool) -> str:
    """Fingerprint embedded in tokens; changes whenever the password or approval does."""

    return sha256(f"{hashed_password}:{int(is_approved)}".encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def refresh_access_token(token: str) -> str:
    """Return a new token with the same claims and a renewed expiry."""

    claims = decode_access_token(token)
    claims.pop("exp", None)
    return create_access_token(claims)


def generate_secure_password(length: int = 12) -> str:
    """Generate a random password mixing cases, digits and punctuation."""

    alphabet = string.ascii_letters + string.digits + "!@#$%&*?"
    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
            and any(char in "!@#$%&*?" for char in password)
        ):
            return password
