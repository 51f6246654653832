from fastapi import Depends
from sqlalchemy.orm import Session

from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user
from EventHub.schemas.chat import ChatCreate, MessageCreate
from EventHub.schemas.common import ApiResponse
from EventHub.services.chat_service import ChatService


@api_router.get("/chats", response_model=ApiResponse)
def list_chats(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    return ApiResponse(success=True, data=ChatService(db).list_chats(current_user["user_id"]))


@api_router.post("/chats", response_model=ApiResponse, status_code=201)
def create_chat(
    chat: ChatCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = ChatService(db).create_chat(chat, current_user)
    return ApiResponse(success=True, message="Chat created successfully.", data=result)


@api_router.get("/chats/{chat_id}", response_model=ApiResponse)
def get_chat(
    chat_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    return ApiResponse(success=True, data=ChatService(db).get_chat(chat_id, current_user["user_id"]))


@api_router.post("/chats/{chat_id}/messages", response_model=ApiResponse, status_code=201)
def send_message(
    chat_id: str,
    message: MessageCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = ChatService(db).send_message(chat_id, message, current_user["user_id"])
    return ApiResponse(success=True, message="Message sent.", data=result)


@api_router.put("/chats/{chat_id}/read", response_model=ApiResponse)
def mark_chat_read(
    chat_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    updated = ChatService(db).mark_read(chat_id, current_user["user_id"])
    return ApiResponse(success=True, message="Messages marked as read.", data={"updated": updated})
