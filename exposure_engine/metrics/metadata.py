from __future__ import annotations

from dataclasses import dataclass

from exposure_engine.schemas.control_data import MetricsConfig


@dataclass(frozen=True)
class Metadata:
    """一次插件调用的目标信息"""

    metrics_plugin_name: str
    table_name: str
    table_id: str = ""
    token: str = ""
    sampling_interval: int = 1

    @classmethod
    def from_config(cls, config: MetricsConfig, sampling_interval: int | None = None) -> "Metadata":
        """config 必须已经带有 metadata（调用方先判断 is_available）"""
        if config.metadata is None:
            raise ValueError("metrics config has no metadata")
        return cls(
            metrics_plugin_name=config.plugin_name,
            table_name=config.metadata.name,
            table_id=config.metadata.id,
            token=config.metadata.token,
            sampling_interval=(
                config.sampling_interval if sampling_interval is None else sampling_interval
            ),
        )
