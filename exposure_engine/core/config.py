# 读取 .env 配置
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Runtime environment, reported in the config/flag exposure row
    ENV_TYPE: str = "prod"

    # SDK identity
    SDK_TYPE: str = "python"
    SDK_VERSION: str = "0.1.0"

    # 全局关闭曝光上报（监控事件不受影响）
    DISABLE_REPORT: bool = False

    # Metrics
    DEFAULT_METRICS_PLUGIN: str = "loguru"
    LOGURU_SINK_LEVEL: str = "INFO"
    # 仅用于本地：没有真实后端时把 DEFAULT_METRICS_PLUGIN 指向日志插件
    ALIAS_DEFAULT_PLUGIN_TO_LOG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore" # 忽略多余的环境变量
    )

settings = Settings()
