from typing import List
from sqlalchemy.orm import Session
from loguru import logger

from EventHub.database import Event, RoleEnum
from EventHub.errors import ForbiddenError, NotFoundError, ValidationError
from EventHub.schemas.event import EventCreate, EventUpdate, EventResponse


class EventService:
    """Service for event planning records."""

    def __init__(self, db: Session):
        self.db = db

    def _get_authorized(self, event_id: str, current_user: dict, action: str) -> Event:
        event = self.db.query(Event).filter(Event.event_id == event_id).first()
        if not event:
            raise NotFoundError("Event not found")
        if event.user_id != current_user.get("user_id") and current_user.get("role") != RoleEnum.admin.value:
            raise ForbiddenError(f"Not authorized to {action} this event")
        return event

    def create_event(self, data: EventCreate, current_user: dict) -> EventResponse:
        payload = data.model_dump()
        payload["services"] = [s.value for s in data.services]
        event = Event(user_id=current_user.get("user_id"), **payload)
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        logger.info(f"Event {event.event_id} created by {event.user_id}")
        return EventResponse.model_validate(event)

    def list_events(self, current_user: dict, include_all: bool = False) -> List[EventResponse]:
        query = self.db.query(Event)
        if not (include_all and current_user.get("role") == RoleEnum.admin.value):
            query = query.filter(Event.user_id == current_user.get("user_id"))
        return [EventResponse.model_validate(e) for e in query.order_by(Event.date.asc()).all()]

    def get_event(self, event_id: str, current_user: dict) -> EventResponse:
        return EventResponse.model_validate(self._get_authorized(event_id, current_user, "access"))

    def update_event(self, event_id: str, update: EventUpdate, current_user: dict) -> EventResponse:
        event = self._get_authorized(event_id, current_user, "update")
        for field, value in update.model_dump(exclude_unset=True).items():
            if field == "services":
                value = [s.value for s in value] if value else []
            elif value is None:
                raise ValidationError(f"{field} cannot be null")
            setattr(event, field, value)
        self.db.commit()
        self.db.refresh(event)
        return EventResponse.model_validate(event)

    def delete_event(self, event_id: str, current_user: dict) -> None:
        event = self._get_authorized(event_id, current_user, "delete")
        self.db.delete(event)
        self.db.commit()
        logger.info(f"Event {event_id} deleted by {current_user.get('user_id')}")
