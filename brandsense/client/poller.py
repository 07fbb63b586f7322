# File: brandsense/client/poller.py

"""
Polling for analysis completion.

The backend analyses projects asynchronously; the dashboard polls the
project until its status settles (``ready`` or ``error``) or a ceiling
elapses. The last successful fetch wins.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from brandsense.client.api import ApiError, BrandSenseClient

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10.0
DEFAULT_CEILING_SECONDS = 300.0

SETTLED_STATUSES = ("ready", "error")


@dataclass
class PollResult:
    status: Optional[str]
    project: Optional[dict[str, Any]]
    data: Optional[dict[str, Any]]
    attempts: int
    timed_out: bool

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"


class AnalysisPoller:
    def __init__(
        self,
        client: BrandSenseClient,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        ceiling: float = DEFAULT_CEILING_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.client = client
        self.interval = interval
        self.ceiling = ceiling
        self._sleep = sleep
        self._clock = clock

    def wait_until_settled(
        self,
        project_id: str,
        on_tick: Optional[Callable[[PollResult], None]] = None,
    ) -> PollResult:
        """
        Poll ``GET /projects/{id}`` until the analysis settles.

        401 and 404 responses stop polling and are re-raised; other API
        errors are logged and the next tick tries again.
        """
        deadline = self._clock() + self.ceiling
        result = PollResult(status=None, project=None, data=None, attempts=0, timed_out=False)

        while True:
            result.attempts += 1
            try:
                body = self.client.get_project(project_id)
            except ApiError as e:
                if e.is_unauthorized or e.is_not_found:
                    raise
                logger.warning("Polling %s failed (attempt %s): %s", project_id, result.attempts, e)
            else:
                result.project = body.get("project")
                result.data = body.get("data")
                result.status = (result.project or {}).get("dataStatus")

            if on_tick is not None:
                on_tick(result)

            if result.status in SETTLED_STATUSES:
                logger.info("Project %s settled as %s after %s polls", project_id, result.status, result.attempts)
                return result

            if self._clock() + self.interval > deadline:
                logger.warning("Stopped polling %s after %s attempts", project_id, result.attempts)
                result.timed_out = True
                return result

            self._sleep(self.interval)
