from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from EventHub.database import get_db, User
from EventHub.token_utils import decode_token

security = HTTPBearer()


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)):
    """
    Resolve the bearer token to {user_id, role, email}.
    The role is re-read from the database so promotions and demotions apply immediately.
    """
    try:
        payload = decode_token(credentials.credentials)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))

    user = db.query(User).filter(User.user_id == payload.get("user_id")).first()
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Your session has expired or the token is invalid. Please log in again to get a new access token."
        )
    return {
        "user_id": user.user_id,
        "role": user.role,
        "email": user.email,
        "exp": payload.get("exp"),
    }


def require_roles(*roles: str):
    """Dependency factory: only callers whose role is in `roles` get through."""
    def checker(current_user: dict = Depends(get_current_user)):
        if current_user.get("role") not in roles:
            raise HTTPException(
                status_code=403,
                detail=f"User role {current_user.get('role')} is not authorized to access this route"
            )
        return current_user
    return checker
