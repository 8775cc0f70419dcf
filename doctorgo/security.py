import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import JWT_ALGORITHM, JWT_SECRET
from .errors import AuthFailed

# pbkdf2 keeps hashing pure-python; fixture passwords are hashed on every repository load
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def issue_session_token(user_id: str, role: str) -> str:
    return jwt.encode(
        {"sub": user_id, "role": role, "jti": uuid.uuid4().hex},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )


def decode_session_token(token: str) -> dict:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AuthFailed("Invalid or expired token")


def get_current_user_id(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    token = None
    if creds and creds.scheme.lower() == "bearer":
        token = creds.credentials

    if not token:
        raise AuthFailed("Missing Bearer token")

    payload = decode_session_token(token)
    sub = payload.get("sub")
    if not sub:
        raise AuthFailed("Invalid or expired token")

    request.state.user_sub = sub
    request.state.user_role = payload.get("role")
    return sub
