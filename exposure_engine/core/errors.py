from __future__ import annotations


class ExposureError(Exception):
    """Base class for every error raised by the reporting engine."""

    code: int = 1


class SinkDispatchError(ExposureError):
    """A metrics sink refused or failed to accept a batch."""

    code = 2

    def __init__(self, plugin_name: str, message: str) -> None:
        super().__init__(f"[{plugin_name}] {message}")
        self.plugin_name = plugin_name


class MetricsPluginNotFoundError(SinkDispatchError):
    code = 3

    def __init__(self, plugin_name: str) -> None:
        super().__init__(plugin_name, "metrics plugin not registered")
