from __future__ import annotations

import time
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException

from exposure_engine.api import deps
from exposure_engine.core.errors import SinkDispatchError
from exposure_engine.exposure.monitoring import MonitorEventEmitter
from exposure_engine.exposure.service import ExposureService
from exposure_engine.models.remote_config import FeatureFlag
from exposure_engine.schemas.api_schema import (
    ApiResponse,
    ConfigExposureRequest,
    ExperimentExposureRequest,
)


router = APIRouter()


def _elapsed(start: float) -> timedelta:
    return timedelta(seconds=time.perf_counter() - start)


@router.post("/{project_id}/experiments", response_model=ApiResponse[bool])
def log_experiments_exposure(
    project_id: str,
    req: ExperimentExposureRequest,
    service: ExposureService = Depends(deps.get_exposure_service),
    monitor: MonitorEventEmitter = Depends(deps.get_monitor_emitter),
) -> ApiResponse[bool]:
    exp_list = req.to_domain()
    start = time.perf_counter()
    try:
        service.log_experiments_exposure(project_id, exp_list)
    except SinkDispatchError as e:
        monitor.experiment_event(project_id, exp_list, _elapsed(start), err=e)
        raise HTTPException(status_code=502, detail=str(e))
    monitor.experiment_event(project_id, exp_list, _elapsed(start))
    return ApiResponse(data=True)


@router.post("/{project_id}/remote-config", response_model=ApiResponse[bool])
def log_remote_config_exposure(
    project_id: str,
    req: ConfigExposureRequest,
    service: ExposureService = Depends(deps.get_exposure_service),
    monitor: MonitorEventEmitter = Depends(deps.get_monitor_emitter),
) -> ApiResponse[bool]:
    config = req.to_domain()
    start = time.perf_counter()
    try:
        service.log_remote_config_exposure(project_id, config)
    except SinkDispatchError as e:
        monitor.remote_config_event(project_id, config, _elapsed(start), err=e)
        raise HTTPException(status_code=502, detail=str(e))
    monitor.remote_config_event(project_id, config, _elapsed(start))
    return ApiResponse(data=True)


@router.post("/{project_id}/feature-flag", response_model=ApiResponse[bool])
def log_feature_flag_exposure(
    project_id: str,
    req: ConfigExposureRequest,
    service: ExposureService = Depends(deps.get_exposure_service),
    monitor: MonitorEventEmitter = Depends(deps.get_monitor_emitter),
) -> ApiResponse[bool]:
    config = req.to_domain()
    start = time.perf_counter()
    try:
        service.log_feature_flag_exposure(project_id, FeatureFlag(config_result=config))
    except SinkDispatchError as e:
        monitor.remote_config_event(project_id, config, _elapsed(start), err=e)
        raise HTTPException(status_code=502, detail=str(e))
    monitor.remote_config_event(project_id, config, _elapsed(start))
    return ApiResponse(data=True)
