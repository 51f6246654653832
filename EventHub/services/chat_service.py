from typing import List
from sqlalchemy.orm import Session
from loguru import logger

from EventHub.database import Chat, ChatMessage, ChatParticipant, User, NotificationTypeEnum
from EventHub.errors import ForbiddenError, NotFoundError
from EventHub.schemas.chat import ChatCreate, ChatResponse, ChatDetailResponse, MessageCreate, MessageResponse
from EventHub.services.notification_service import NotificationService
from EventHub.utils_time import get_utc_time


class ChatService:
    """Service for participant-only chats and their messages."""

    def __init__(self, db: Session):
        self.db = db

    def _get_for_participant(self, chat_id: str, user_id: str) -> Chat:
        chat = self.db.query(Chat).filter(Chat.chat_id == chat_id).first()
        if not chat:
            raise NotFoundError("Chat not found")
        if user_id not in chat.participant_ids:
            raise ForbiddenError("Not authorized to access this chat")
        return chat

    def create_chat(self, data: ChatCreate, current_user: dict) -> ChatResponse:
        user_id = current_user.get("user_id")
        # Keep order, drop duplicates, creator first
        participant_ids = list(dict.fromkeys([user_id, *data.participants]))
        known = {u.user_id for u in self.db.query(User).filter(User.user_id.in_(participant_ids)).all()}
        missing = [pid for pid in participant_ids if pid not in known]
        if missing:
            raise NotFoundError(f"Unknown participant(s): {', '.join(missing)}")
        chat = Chat(
            event_id=data.event_id,
            booking_id=data.booking_id,
            participants=[ChatParticipant(user_id=pid) for pid in participant_ids],
        )
        self.db.add(chat)
        self.db.commit()
        self.db.refresh(chat)
        logger.info(f"Chat {chat.chat_id} opened by {user_id} with {len(participant_ids)} participants")
        return ChatResponse.model_validate(chat)

    def list_chats(self, user_id: str) -> List[ChatResponse]:
        chats = (
            self.db.query(Chat)
            .join(ChatParticipant, ChatParticipant.chat_id == Chat.chat_id)
            .filter(ChatParticipant.user_id == user_id, Chat.is_active == True)  # noqa: E712
            .order_by(Chat.updated_at.desc())
            .all()
        )
        return [ChatResponse.model_validate(c) for c in chats]

    def get_chat(self, chat_id: str, user_id: str) -> ChatDetailResponse:
        return ChatDetailResponse.model_validate(self._get_for_participant(chat_id, user_id))

    def send_message(self, chat_id: str, data: MessageCreate, user_id: str) -> MessageResponse:
        chat = self._get_for_participant(chat_id, user_id)
        now = get_utc_time()
        message = ChatMessage(sender_id=user_id, content=data.content, attachments=list(data.attachments), timestamp=now)
        chat.messages.append(message)
        chat.last_message = {"content": data.content, "sender": user_id, "timestamp": now.isoformat()}
        chat.updated_at = now

        notifications = NotificationService(self.db)
        for participant_id in chat.participant_ids:
            if participant_id == user_id:
                continue
            notifications.notify(
                recipient_id=participant_id,
                sender_id=user_id,
                type=NotificationTypeEnum.message_received,
                title="New message",
                message=data.content[:100],
                related_model="Chat",
                related_id=chat.chat_id,
            )
        self.db.commit()
        self.db.refresh(message)
        return MessageResponse.model_validate(message)

    def mark_read(self, chat_id: str, user_id: str) -> int:
        """Mark every message sent by someone else as read. Returns how many changed."""
        chat = self._get_for_participant(chat_id, user_id)
        updated = 0
        for message in chat.messages:
            if message.sender_id != user_id and not message.is_read:
                message.is_read = True
                updated += 1
        self.db.commit()
        return updated
