from fastapi import APIRouter, Depends

from safelyq.dependencies.services import get_appointment_service
from safelyq.schemas.appointment import AppointmentQuery, AppointmentResult
from safelyq.services.appointment import AppointmentService

router = APIRouter()


@router.post("/check", response_model=AppointmentResult)
async def check_user_appointments(
    req: AppointmentQuery,
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.check_user_appointments(req)
