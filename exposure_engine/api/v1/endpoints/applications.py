from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException
from loguru import logger

from exposure_engine.api import deps
from exposure_engine.cache import ApplicationCache
from exposure_engine.schemas.api_schema import ApiResponse
from exposure_engine.schemas.control_data import Application, ControlData


router = APIRouter()


@router.put("/{project_id}", response_model=ApiResponse[Application])
def put_application(
    project_id: str,
    control_data: ControlData = Body(..., alias="controlData", embed=True),
    cache: ApplicationCache = Depends(deps.get_cache),
) -> ApiResponse[Application]:
    application = Application(project_id=project_id, control_data=control_data)
    cache.set_application(application)
    logger.info(f"[Applications] 更新项目配置: project={project_id}")
    return ApiResponse(data=application)


@router.get("/{project_id}", response_model=ApiResponse[Application])
def get_application(
    project_id: str,
    cache: ApplicationCache = Depends(deps.get_cache),
) -> ApiResponse[Application]:
    application = cache.get_application(project_id)
    if application is None:
        raise HTTPException(status_code=404, detail="application not found")
    return ApiResponse(data=application)


@router.delete("/{project_id}", response_model=ApiResponse[bool])
def delete_application(
    project_id: str,
    cache: ApplicationCache = Depends(deps.get_cache),
) -> ApiResponse[bool]:
    return ApiResponse(data=cache.remove_application(project_id))
