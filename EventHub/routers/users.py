from fastapi import Depends
from sqlalchemy.orm import Session

from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user, require_roles
from EventHub.schemas.common import ApiResponse
from EventHub.services.user_service import UserService
from EventHub.token_utils import format_expiration_time


@api_router.get("/users/me", response_model=ApiResponse)
def get_me(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    profile = UserService(db).get_profile(current_user["user_id"]).model_dump()
    if current_user.get("exp"):
        profile["token_expires_at"] = format_expiration_time(current_user["exp"])
    return ApiResponse(success=True, data=profile)


@api_router.get("/users", response_model=ApiResponse)
def list_users(db: Session = Depends(get_db), current_user: dict = Depends(require_roles("admin"))):
    users = UserService(db).list_users()
    return ApiResponse(success=True, message=f"{len(users)} user(s) found.", data=users)


@api_router.get("/users/{user_id}", response_model=ApiResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    return ApiResponse(success=True, data=UserService(db).get_user(user_id, current_user))
