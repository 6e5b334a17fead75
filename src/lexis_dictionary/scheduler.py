"""Background refresh scheduling for file-backed dictionaries."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

_JOB_ID = "dictionary_refresh"


class RefreshScheduler:
    """Periodically invokes a reload callback on a private background scheduler.

    Each scheduler belongs to exactly one DictionaryStore and runs its own
    APScheduler instance, so independent dictionaries never share timer state.

    Ticks never overlap: a tick arriving while the previous reload is still
    running is dropped, not queued. This holds for scheduled ticks and for
    ticks requested directly through trigger().
    """

    def __init__(
        self,
        reload: Callable[[], object],
        interval: float,
        name: str = "dictionary",
    ) -> None:
        """Initialise the scheduler without starting it.

        Args:
            reload: Callback run on every tick
            interval: Seconds between ticks, must be positive
            name: Label used in log messages and the job name

        Raises:
            ValueError: If interval is not positive

        """
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")

        self._reload = reload
        self._interval = interval
        self._name = name
        self._in_flight = threading.Lock()
        self._state_lock = threading.Lock()
        self._scheduler: BackgroundScheduler | None = None
        self._stopped = False

    @property
    def interval(self) -> float:
        """Seconds between ticks."""
        return self._interval

    @property
    def running(self) -> bool:
        """Whether scheduled ticks are currently being issued."""
        scheduler = self._scheduler
        return scheduler is not None and scheduler.running

    @property
    def stopped(self) -> bool:
        """Whether stop() has been called."""
        return self._stopped

    def start(self) -> None:
        """Start issuing ticks. Does nothing if already started or stopped."""
        with self._state_lock:
            if self._stopped or self._scheduler is not None:
                return

            scheduler = BackgroundScheduler(
                jobstores={"default": MemoryJobStore()},
                executors={"default": ThreadPoolExecutor(max_workers=1)},
                job_defaults={
                    "coalesce": True,  # Combine pending executions into one
                    "max_instances": 1,  # Prevent overlapping reloads
                },
                daemon=True,
            )
            scheduler.add_job(
                self.trigger,
                IntervalTrigger(seconds=self._interval),
                id=_JOB_ID,
                name=f"Refresh {self._name}",
            )
            scheduler.start()
            self._scheduler = scheduler

        logger.debug(
            "Started refresh scheduler for %s every %ss", self._name, self._interval
        )

    def trigger(self) -> bool:
        """Run one tick in the calling thread.

        Returns:
            True if the reload callback ran, False if the tick was dropped
            because another reload is in flight or the scheduler is stopped

        """
        if not self._in_flight.acquire(blocking=False):
            logger.debug(
                "Dropping refresh tick for %s, previous reload still running",
                self._name,
            )
            return False
        try:
            if self._stopped:
                return False
            self._reload()
            return True
        finally:
            self._in_flight.release()

    def stop(self) -> None:
        """Stop issuing ticks.

        Blocks until an in-flight reload finishes; afterwards no further reloads
        run. Safe to call more than once and from several threads.
        """
        with self._state_lock:
            already_stopped = self._stopped
            self._stopped = True
            scheduler, self._scheduler = self._scheduler, None

        if scheduler is not None and scheduler.running:
            scheduler.shutdown(wait=True)

        # wait out a reload started through trigger() by another thread
        with self._in_flight:
            pass

        if not already_stopped:
            logger.debug("Stopped refresh scheduler for %s", self._name)
