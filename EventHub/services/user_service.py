from typing import List
from sqlalchemy.orm import Session

from EventHub.database import User, RoleEnum
from EventHub.errors import ForbiddenError, NotFoundError
from EventHub.schemas.user import UserResponse, UserProfileResponse


class UserService:
    """Service for user-related reads. Registration and login live with the auth provider."""

    def __init__(self, db: Session):
        self.db = db

    def _get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, user_id: str) -> UserProfileResponse:
        user = self._get_user(user_id)
        profile = UserProfileResponse.model_validate(user)
        if user.vendors:
            profile.vendor_id = user.vendors[0].vendor_id
        return profile

    def list_users(self) -> List[UserResponse]:
        users = self.db.query(User).order_by(User.created_at.asc()).all()
        return [UserResponse.model_validate(u) for u in users]

    def get_user(self, user_id: str, current_user: dict) -> UserResponse:
        if user_id != current_user.get("user_id") and current_user.get("role") != RoleEnum.admin.value:
            raise ForbiddenError("Not authorized to view this user")
        return UserResponse.model_validate(self._get_user(user_id))
