import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from EventHub.config import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES


def format_expiration_time(unix_timestamp) -> str:
    """Convert Unix timestamp to a human-readable UTC string."""
    dt = datetime.fromtimestamp(unix_timestamp, tz=timezone.utc)
    return dt.strftime('%d-%b-%Y %I:%M %p UTC')


def create_access_token(data: dict, expires_delta: timedelta = None) -> Dict[str, Any]:
    """
    Issue a bearer token for a principal.
    `data` must carry user_id, role and email; login itself lives outside this service.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    token = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    exp_timestamp = int(expire.timestamp())
    return {
        "token": token,
        "expires_at": format_expiration_time(exp_timestamp)
    }


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token expired")
    except jwt.InvalidTokenError:
        raise ValueError("Invalid token")
