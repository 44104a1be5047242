# 路由汇总
from fastapi import APIRouter
from exposure_engine.api.v1.endpoints import applications, exposure

api_router = APIRouter()

# 挂载项目配置模块 (访问地址: /api/v1/applications/...)
api_router.include_router(applications.router, prefix="/applications", tags=["项目配置模块"])

# 挂载曝光上报模块 (访问地址: /api/v1/exposure/...)
api_router.include_router(exposure.router, prefix="/exposure", tags=["曝光上报模块"])
