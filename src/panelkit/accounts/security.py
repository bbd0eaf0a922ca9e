from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

# Use bcrypt for password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain password against its hashed version.

    Args:
        plain_password: The password as entered by the user.
        hashed_password: The password as stored in the database.

    Returns:
        True if the password is correct, False otherwise.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a hash passlib recognizes
        return False


def get_password_hash(password: str) -> str:
    """
    Hashes a plain password.
    """
    return pwd_context.hash(password)


def create_access_token(username: str, secret: str, expires_delta: timedelta) -> str:
    """
    Creates a signed access token for ``username``.

    Args:
        username: Stored in the ``sub`` claim
        secret: Signing key
        expires_delta: Token lifetime

    Returns:
        The encoded JWT
    """
    expire = datetime.now(UTC) + expires_delta
    return jwt.encode({"sub": username, "exp": expire}, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> str | None:
    """
    Returns the username stored in a valid token, or None when the token is
    malformed, tampered with or expired.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")
