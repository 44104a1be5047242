"""
运行环境信息

上报记录里需要的本机 IP、SDK 标识、调用栈位置与当前时间都从这里取，
测试中可以替换为固定值的实现。
"""

from __future__ import annotations

import os
import socket
import sys
from datetime import datetime
from functools import lru_cache
from typing import Optional

from loguru import logger

from exposure_engine.core.config import settings


@lru_cache(maxsize=1)
def _resolve_local_ip() -> str:
    # UDP connect 不会真正发包，只用于让内核选出出口网卡地址
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(("10.255.255.255", 1))
        return sock.getsockname()[0]
    except OSError as e:
        logger.debug(f"[Environment] 获取本机 IP 失败，回退到 127.0.0.1: {e}")
        return "127.0.0.1"
    finally:
        sock.close()


class Environment:
    """
    环境信息提供者

    Args:
        sdk_type: SDK 类型标识
        sdk_version: SDK 版本号
        env_type: 部署环境（写入远程配置曝光行）
    """

    def __init__(
        self,
        sdk_type: Optional[str] = None,
        sdk_version: Optional[str] = None,
        env_type: Optional[str] = None,
    ):
        self.sdk_type = sdk_type or settings.SDK_TYPE
        self.sdk_version = sdk_version or settings.SDK_VERSION
        self.env_type = env_type if env_type is not None else settings.ENV_TYPE

    def local_ip(self) -> str:
        return _resolve_local_ip()

    def now(self) -> datetime:
        """本地时钟当前时间（naive datetime）"""
        return datetime.now()

    def invoke_path(self, skip: int) -> str:
        """
        返回跳过 skip 层调用栈后的调用位置，格式为 ``file:line function``

        调用栈不够深时返回空字符串。
        """
        try:
            frame = sys._getframe(skip)
        except ValueError:
            return ""
        code = frame.f_code
        return f"{os.path.basename(code.co_filename)}:{frame.f_lineno} {code.co_name}"
