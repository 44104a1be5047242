from __future__ import annotations

from typing import Dict, Iterable, Optional

from exposure_engine.schemas.control_data import Application


class ApplicationCache:
    """Process-local store of per-project configuration snapshots.

    Snapshots are replaced wholesale, never mutated in place, so a caller
    holding one keeps a consistent view for the whole call. Loading and
    refreshing them is up to whoever owns the cache.
    """

    def __init__(self, applications: Optional[Iterable[Application]] = None) -> None:
        self._applications: Dict[str, Application] = {}
        for application in applications or []:
            self.set_application(application)

    def get_application(self, project_id: str) -> Optional[Application]:
        return self._applications.get(project_id)

    def set_application(self, application: Application) -> None:
        self._applications[application.project_id] = application

    def remove_application(self, project_id: str) -> bool:
        return self._applications.pop(project_id, None) is not None

    def project_ids(self) -> list[str]:
        return sorted(self._applications)
