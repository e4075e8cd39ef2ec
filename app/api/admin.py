from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.schemas import BookingListSchema, BookingSchema
from app.application.exceptions import BookingNotFoundError
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.wiring.dependencies import get_manage_bookings_use_case

router = APIRouter()


@router.get("/admin/bookings", response_model=BookingListSchema)
def list_bookings(
    include_cancelled: bool = True,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
) -> BookingListSchema:
    bookings = uc.list_bookings(include_cancelled=include_cancelled)
    return BookingListSchema(bookings=[BookingSchema.from_entity(b) for b in bookings])


@router.post("/admin/bookings/{booking_id}/cancel", response_model=BookingSchema)
def cancel_booking(
    booking_id: str,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
) -> BookingSchema:
    try:
        booking = uc.cancel(booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail=f"Booking {booking_id} not found")
    return BookingSchema.from_entity(booking)
