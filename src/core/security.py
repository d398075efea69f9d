"""Credential primitives: password hashing, JWT access tokens and one-time codes.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` with
url-safe base64 parts. Access tokens are PyJWT-signed and carry the user id
and email. TOTP codes follow RFC 6238 (HMAC-SHA1, 30-second step, 6 digits)
over a hex-encoded secret, accepting one step of clock drift either way.
"""

import base64
import hashlib
import hmac
import secrets
import struct
import time
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from urllib.parse import quote, urlencode

import jwt
from loguru import logger

from src.core.config import AuthConfig
from src.core.constants import (
    MFA_BACKUP_CODE_COUNT,
    MFA_CODE_DIGITS,
    MFA_ISSUER,
    TOTP_STEP_SECONDS,
    TOTP_WINDOW,
)
from src.core.exceptions import UnauthorizedError

PASSWORD_ALGORITHM = "pbkdf2_sha256"
TOTP_SECRET_BYTES = 20


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Claims carried by an access token."""

    user_id: str
    email: str


def hash_password(password: str, iterations: int) -> str:
    """Hash a password with a fresh random salt."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        (
            PASSWORD_ALGORITHM,
            str(iterations),
            base64.urlsafe_b64encode(salt).decode(),
            base64.urlsafe_b64encode(digest).decode(),
        )
    )


def verify_password(password: str, hashed: str) -> bool:
    """Check ``password`` against a stored hash in constant time.

    Malformed hashes never match.
    """
    parts = hashed.split("$")
    if len(parts) != 4 or parts[0] != PASSWORD_ALGORITHM or not parts[1].isdigit():
        return False
    try:
        salt = base64.urlsafe_b64decode(parts[2].encode())
        expected = base64.urlsafe_b64decode(parts[3].encode())
    except ValueError:
        return False
    got = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, int(parts[1]))
    return hmac.compare_digest(got, expected)


def create_access_token(
    payload: TokenPayload, config: AuthConfig, now: datetime | None = None
) -> str:
    """Sign an access token that expires after ``config.token_expire_hours``.

    Args:
        payload: User id and email to embed.
        config: Secret, algorithm and lifetime.
        now: Issue time; defaults to the current UTC time.

    Returns:
        str: The encoded JWT.
    """
    issued_at = now or datetime.now(UTC)
    claims = {
        "userId": payload.user_id,
        "email": payload.email,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=config.token_expire_hours),
    }
    return jwt.encode(
        claims, config.jwt_secret.get_secret_value(), algorithm=config.jwt_algorithm
    )


def decode_access_token(token: str, config: AuthConfig) -> TokenPayload:
    """Verify signature and expiry of an access token.

    Args:
        token: Encoded JWT.
        config: Secret and algorithm used for verification.

    Returns:
        TokenPayload: The decoded claims.

    Raises:
        UnauthorizedError: If the token is malformed, tampered with, expired or
            its ``userId`` is not a UUID.
    """
    try:
        claims = jwt.decode(
            token,
            config.jwt_secret.get_secret_value(),
            algorithms=[config.jwt_algorithm],
            options={"require": ["exp", "userId"]},
        )
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected access token: {}", type(e).__name__)
        raise UnauthorizedError("Token de acesso inválido", cause=e) from e

    try:
        user_id = uuid.UUID(str(claims["userId"]))
    except ValueError as e:
        logger.debug("Rejected access token: userId is not a UUID")
        raise UnauthorizedError("Token de acesso inválido", cause=e) from e

    return TokenPayload(user_id=str(user_id), email=str(claims.get("email", "")))


def generate_totp_secret() -> str:
    """Return a new random TOTP secret as hex."""
    return secrets.token_hex(TOTP_SECRET_BYTES)


def _hotp(secret: bytes, counter: int, digits: int = MFA_CODE_DIGITS) -> str:
    digest = hmac.new(secret, struct.pack(">Q", counter), hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    binary = struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF
    return str(binary % 10**digits).zfill(digits)


def generate_totp(secret_hex: str, at: float | None = None) -> str:
    """Compute the TOTP code for ``secret_hex`` at time ``at`` (defaults to now)."""
    counter = int((time.time() if at is None else at) // TOTP_STEP_SECONDS)
    return _hotp(bytes.fromhex(secret_hex), counter)


def verify_totp(secret_hex: str, code: str, at: float | None = None) -> bool:
    """Accept ``code`` if it matches the current step or one step either side."""
    try:
        secret = bytes.fromhex(secret_hex)
    except ValueError:
        return False

    counter = int((time.time() if at is None else at) // TOTP_STEP_SECONDS)
    return any(
        hmac.compare_digest(_hotp(secret, counter + drift), code)
        for drift in range(-TOTP_WINDOW, TOTP_WINDOW + 1)
    )


def build_otpauth_uri(secret_hex: str, account: str) -> str:
    """Build the provisioning URI read by authenticator apps.

    Authenticator apps expect a base32 secret, so the hex secret is
    re-encoded here.
    """
    secret_b32 = base64.b32encode(bytes.fromhex(secret_hex)).decode().rstrip("=")
    label = quote(f"{MFA_ISSUER}:{account}")
    query = urlencode({"secret": secret_b32, "issuer": MFA_ISSUER})
    return f"otpauth://totp/{label}?{query}"


def generate_numeric_code(digits: int = MFA_CODE_DIGITS) -> str:
    """Random zero-padded numeric code for SMS/e-mail delivery."""
    return str(secrets.randbelow(10**digits)).zfill(digits)


def generate_backup_codes(count: int = MFA_BACKUP_CODE_COUNT) -> list[str]:
    """Single-use recovery codes, 8 upper-case hex characters each."""
    return [secrets.token_hex(4).upper() for _ in range(count)]
