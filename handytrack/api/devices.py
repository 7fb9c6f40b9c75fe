"""Device inventory API endpoints."""

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from handytrack.api.deps import get_current_user, get_device_service
from handytrack.models.device import DeviceStatus
from handytrack.models.user import User
from handytrack.repositories.device_repository import DeviceFilters
from handytrack.schemas.device import (
    DeviceCreate,
    DeviceDetailResponse,
    DevicePatch,
    DeviceResponse,
    DeviceStatsResponse,
    DeviceStatusUpdate,
)
from handytrack.services.device_service import DeviceResult, DeviceService

router = APIRouter(prefix="/devices", tags=["devices"])

RESULT_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "duplicate_id": status.HTTP_409_CONFLICT,
    "duplicate_imei": status.HTTP_409_CONFLICT,
    "invalid_status": status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _raise_for_result(result: DeviceResult) -> None:
    if not result.success:
        raise HTTPException(
            status_code=RESULT_STATUS.get(result.reason, status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=result.error,
        )


@router.get("", response_model=list[DeviceResponse])
def list_devices(
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    date_type: Literal["purchase_date", "sale_date"] = Query(default="purchase_date"),
    status_filter: Optional[DeviceStatus] = Query(default=None, alias="status"),
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    """List the current user's devices, newest first."""
    filters = DeviceFilters(
        date_from=date_from,
        date_to=date_to,
        date_type=date_type,
        status=status_filter.value if status_filter else None,
    )
    devices = service.get_devices(user.id, filters)
    return [DeviceResponse.model_validate(d) for d in devices]


@router.get("/stats", response_model=DeviceStatsResponse)
def device_stats(
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    stats = service.get_stats(user.id)
    return DeviceStatsResponse(
        total=stats.total,
        stock=stats.stock,
        repair=stats.repair,
        sold=stats.sold,
    )


@router.get("/{device_id}", response_model=DeviceDetailResponse)
def get_device(
    device_id: str,
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    device = service.get_device(user.id, device_id)
    if not device:
        raise HTTPException(status_code=404, detail="Device not found")
    return DeviceDetailResponse.model_validate(device)


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(
    request: DeviceCreate,
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    result = service.create_device(user.id, request)
    _raise_for_result(result)
    return DeviceResponse.model_validate(result.device)


@router.patch("/{device_id}", response_model=DeviceResponse)
def update_device(
    device_id: str,
    request: DevicePatch,
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    """Apply only the fields present in the request body."""
    result = service.update_device(user.id, device_id, request)
    _raise_for_result(result)
    return DeviceResponse.model_validate(result.device)


@router.patch("/{device_id}/status", response_model=DeviceResponse)
def update_device_status(
    device_id: str,
    request: DeviceStatusUpdate,
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    result = service.update_status(user.id, device_id, request.status)
    _raise_for_result(result)
    return DeviceResponse.model_validate(result.device)


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_device(
    device_id: str,
    user: User = Depends(get_current_user),
    service: DeviceService = Depends(get_device_service),
):
    _raise_for_result(service.delete_device(user.id, device_id))
