from fastapi import Depends, Query
from sqlalchemy.orm import Session

from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user
from EventHub.schemas.common import ApiResponse
from EventHub.schemas.event import EventCreate, EventUpdate
from EventHub.services.event_service import EventService


@api_router.get("/events", response_model=ApiResponse)
def list_events(
    all: bool = Query(False, description="Admins only: include every user's events"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    events = EventService(db).list_events(current_user, include_all=all)
    return ApiResponse(success=True, message=f"{len(events)} event(s) found.", data=events)


@api_router.post("/events", response_model=ApiResponse, status_code=201)
def create_event(
    event: EventCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = EventService(db).create_event(event, current_user)
    return ApiResponse(success=True, message="Event created successfully.", data=result)


@api_router.get("/events/{event_id}", response_model=ApiResponse)
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    return ApiResponse(success=True, data=EventService(db).get_event(event_id, current_user))


@api_router.put("/events/{event_id}", response_model=ApiResponse)
def update_event(
    event_id: str,
    update: EventUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = EventService(db).update_event(event_id, update, current_user)
    return ApiResponse(success=True, message="Event updated successfully.", data=result)


@api_router.delete("/events/{event_id}", response_model=ApiResponse)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    EventService(db).delete_event(event_id, current_user)
    return ApiResponse(success=True, message="Event deleted successfully.", data={})
