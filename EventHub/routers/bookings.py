from fastapi import Depends
from sqlalchemy.orm import Session

from EventHub.database import get_db
from EventHub.routers.base import api_router
from EventHub.routers.auth import get_current_user
from EventHub.schemas.booking import BookingCreate, BookingUpdate
from EventHub.schemas.common import ApiResponse
from EventHub.services.booking_service import BookingService


@api_router.get("/bookings", response_model=ApiResponse)
def list_bookings(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    bookings = BookingService(db).list_bookings(current_user)
    return ApiResponse(success=True, message=f"{len(bookings)} booking(s) found.", data=bookings)


@api_router.post("/bookings", response_model=ApiResponse, status_code=201)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = BookingService(db).create_booking(booking, current_user)
    return ApiResponse(success=True, message="Booking created successfully.", data=result)


@api_router.get("/bookings/{booking_id}", response_model=ApiResponse)
def get_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    return ApiResponse(success=True, data=BookingService(db).get_booking(booking_id, current_user))


@api_router.put("/bookings/{booking_id}", response_model=ApiResponse)
def update_booking(
    booking_id: str,
    update: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = BookingService(db).update_booking(booking_id, update, current_user)
    return ApiResponse(success=True, message="Booking updated successfully.", data=result)


@api_router.delete("/bookings/{booking_id}", response_model=ApiResponse)
def cancel_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    result = BookingService(db).cancel_booking(booking_id, current_user)
    return ApiResponse(success=True, message="Booking cancelled successfully.", data=result)
