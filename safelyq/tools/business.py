from fastapi import APIRouter, Depends

from safelyq.dependencies.services import get_business_info_service
from safelyq.schemas.business import BusinessInfoQuery, BusinessInfoResult
from safelyq.services.business import BusinessInfoService

router = APIRouter()


@router.post("/info", response_model=BusinessInfoResult)
async def get_business_info(
    req: BusinessInfoQuery,
    service: BusinessInfoService = Depends(get_business_info_service),
):
    return await service.get_business_info(req)
