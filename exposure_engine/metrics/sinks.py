from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from loguru import logger

from exposure_engine.metrics.base import IMetricsSink
from exposure_engine.metrics.metadata import Metadata
from exposure_engine.metrics.sampling import Sampler, random_sampler
from exposure_engine.schemas.exposure_schema import ExposureGroup
from exposure_engine.schemas.monitor_schema import MonitorEventGroup


@dataclass
class MemorySink(IMetricsSink):
    """
    Keeps every batch in memory.

    Useful for local debugging and as a fixture; no sampling is applied.
    """

    exposures: List[Tuple[Metadata, ExposureGroup]] = field(default_factory=list)
    rows: List[Tuple[Metadata, List[List[str]]]] = field(default_factory=list)
    monitor_events: List[Tuple[Metadata, MonitorEventGroup]] = field(default_factory=list)

    def log_exposure(self, metadata: Metadata, group: ExposureGroup) -> None:
        self.exposures.append((metadata, group))

    def send_data(self, metadata: Metadata, rows: Sequence[List[str]]) -> None:
        self.rows.append((metadata, [list(r) for r in rows]))

    def log_monitor_event(self, metadata: Metadata, events: MonitorEventGroup) -> None:
        self.monitor_events.append((metadata, events))

    def clear(self) -> None:
        self.exposures.clear()
        self.rows.clear()
        self.monitor_events.clear()


class LoguruSink(IMetricsSink):
    """Writes each sampled batch to the log, one line per record."""

    def __init__(self, level: str = "INFO", sampler: Sampler = random_sampler):
        self.level = level
        self._sampler = sampler

    def log_exposure(self, metadata: Metadata, group: ExposureGroup) -> None:
        if not self._sampler(metadata.sampling_interval):
            return
        for exposure in group.exposures:
            logger.log(
                self.level,
                f"[LoguruSink] exposure table={metadata.table_name} "
                f"{exposure.model_dump_json(by_alias=True)}",
            )

    def send_data(self, metadata: Metadata, rows: Sequence[List[str]]) -> None:
        if not self._sampler(metadata.sampling_interval):
            return
        for row in rows:
            logger.log(self.level, f"[LoguruSink] row table={metadata.table_name} {'|'.join(row)}")

    def log_monitor_event(self, metadata: Metadata, events: MonitorEventGroup) -> None:
        if not self._sampler(metadata.sampling_interval):
            return
        for event in events.events:
            logger.log(
                self.level,
                f"[LoguruSink] event table={metadata.table_name} "
                f"{event.model_dump_json(by_alias=True)}",
            )
