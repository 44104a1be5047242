# 【入口】整个程序的启动点
import sys
import time
from datetime import timedelta

from fastapi import FastAPI
from loguru import logger

from exposure_engine import __version__
from exposure_engine.api import deps
from exposure_engine.api.v1.router import api_router
from exposure_engine.cache import ApplicationCache
from exposure_engine.core.config import settings
from exposure_engine.exposure.monitoring import MonitorEventEmitter

# 进程启动时刻，用于统计初始化耗时
_STARTED_AT = time.perf_counter()


# ========================================
# Loguru 日志配置
# ========================================
def setup_logger():
    """配置 loguru 日志系统"""
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.LOG_LEVEL,
        colorize=True,
    )

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            rotation="50 MB",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}",
            level=settings.LOG_LEVEL,
        )


def report_init(
    emitter: MonitorEventEmitter,
    cache: ApplicationCache,
    started_at: float,
    err: BaseException | None = None,
) -> None:
    """为缓存中的每个项目上报一次初始化事件"""
    latency = timedelta(seconds=time.perf_counter() - started_at)
    emitter.init_event(cache.project_ids(), latency, err)


setup_logger()


app = FastAPI(
    title="Exposure Engine - 曝光与监控上报",
    description="实验 / 远程配置 / 特性开关曝光按场景路由到上报插件",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# 注册所有路由，统一加前缀 /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    """应用启动事件"""
    logger.info(f"曝光上报服务启动: env={settings.ENV_TYPE} disable_report={settings.DISABLE_REPORT}")
    report_init(deps.get_monitor_emitter(), deps.get_cache(), _STARTED_AT)


@app.get("/")
def health_check():
    """健康检查端点"""
    return {"status": "ok"}
