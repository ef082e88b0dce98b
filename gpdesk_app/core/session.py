"""Explicit dashboard session state and the stale-fetch guard.

One ``DashboardSession`` is built per Streamlit session by the composition
root in ``gpdesk_app.app`` and handed to each page, so pages never reach into
module-level globals for the selected project or month.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .config import SETTINGS
from .models import MonthData

logger = logging.getLogger(__name__)


class FetchGeneration:
    """Monotonic token per fetch batch.

    ``begin`` supersedes every earlier token, so a slow response for a month
    the user has already left can be recognized and dropped instead of
    overwriting the newer selection.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    def begin(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    @property
    def current(self) -> int:
        return self._current


@dataclass(slots=True)
class SessionPolicy:
    max_idle: timedelta = SETTINGS.session_max_idle

    def is_expired(self, last_seen: datetime, now: datetime) -> bool:
        return now - last_seen > self.max_idle


@dataclass
class DashboardSession:
    service: object | None = None
    project_id: str | None = None
    month: str | None = None
    month_data: MonthData | None = None
    policy: SessionPolicy = field(default_factory=SessionPolicy)
    generation: FetchGeneration = field(default_factory=FetchGeneration)
    last_seen: datetime = field(default_factory=datetime.now)

    def touch(self, now: datetime | None = None) -> bool:
        """Refresh the idle clock; reset the selection if the session expired.

        Returns True when an expiry reset happened.
        """
        now = now or datetime.now()
        expired = self.policy.is_expired(self.last_seen, now)
        if expired:
            logger.info("Dashboard session idle for more than %s; clearing selection", self.policy.max_idle)
            self.clear_selection()
        self.last_seen = now
        return expired

    def select_project(self, project_id: str | None) -> None:
        if project_id == self.project_id:
            return
        self.project_id = project_id
        self.month = None
        self.month_data = None
        self.generation.begin()

    def select_month(self, month: str | None) -> None:
        if month == self.month:
            return
        self.month = month
        self.month_data = None
        self.generation.begin()

    def clear_selection(self) -> None:
        self.project_id = None
        self.month = None
        self.month_data = None
        self.generation.begin()

    def store(self, token: int, data: MonthData) -> bool:
        """Keep ``data`` only if it belongs to the latest fetch batch."""
        if not self.generation.is_current(token):
            logger.debug("Dropping stale month data for %s (token %s)", data.month, token)
            return False
        self.month_data = data
        return True

    @property
    def ready(self) -> bool:
        return self.service is not None
