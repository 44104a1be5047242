# 依赖注入（进程内单例）
from functools import lru_cache

from exposure_engine.cache import ApplicationCache
from exposure_engine.core.config import settings
from exposure_engine.exposure.monitoring import MonitorEventEmitter
from exposure_engine.exposure.service import ExposureService
from exposure_engine.metrics.client import MetricsClient
from exposure_engine.metrics.factory import create_metrics_client


@lru_cache(maxsize=1)
def get_cache() -> ApplicationCache:
    return ApplicationCache()


@lru_cache(maxsize=1)
def get_metrics_client() -> MetricsClient:
    return create_metrics_client()


def get_exposure_service() -> ExposureService:
    # 服务本身无状态，每个请求新建即可
    return ExposureService(
        get_cache(),
        get_metrics_client(),
        disable_report=settings.DISABLE_REPORT,
    )


@lru_cache(maxsize=1)
def get_monitor_emitter() -> MonitorEventEmitter:
    return MonitorEventEmitter(get_cache(), get_metrics_client())
