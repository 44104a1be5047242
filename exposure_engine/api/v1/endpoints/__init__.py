"""
API 端点模块

包含所有 v1 版本的 API 端点定义
"""

from exposure_engine.api.v1.endpoints import applications, exposure

__all__ = ["applications", "exposure"]
