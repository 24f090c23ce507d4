from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, List, Optional

from ..metrics.engine import compute_market_metrics
from ..news.fetcher import NewsFetcher
from ..sentiment.analyzer import SentimentAnalyzer
from ..util.jsonlog import log_event, utc_now
from .history import SentimentHistory
from .types import CyclePhase, DashboardState, OrchestratorConfig

Subscriber = Callable[[DashboardState], None]


@dataclass
class Orchestrator:
    """Runs refresh cycles: fetch -> analyze -> metrics -> update history.

    Phases per cycle: IDLE -> FETCHING -> ANALYZING -> UPDATING -> IDLE, or
    FAILED from any stage. FAILED sticks until a later cycle succeeds.

    Only one cycle runs at a time. A manual `trigger()` while a cycle is in
    flight is ignored (not queued) and returns False; the in-flight cycle's
    result is what the caller will see.

    A failed cycle keeps the last successful snapshot and metrics visible and
    only records the error message.
    """

    logger: logging.Logger
    config: OrchestratorConfig

    fetcher: NewsFetcher
    analyzer: SentimentAnalyzer
    history: SentimentHistory = field(default_factory=SentimentHistory)

    clock: Callable[[], datetime] = utc_now

    phase: CyclePhase = CyclePhase.IDLE

    _state: DashboardState = field(default_factory=DashboardState, init=False, repr=False)
    _subscribers: List[Subscriber] = field(default_factory=list, init=False, repr=False)
    _cycle_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _state_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _stop_event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)
    _thread: Optional[threading.Thread] = field(default=None, init=False, repr=False)

    def latest(self) -> DashboardState:
        with self._state_lock:
            return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for a `DashboardState` after every cycle. Returns an unsubscribe function."""
        with self._state_lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._state_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def is_running(self) -> bool:
        return self._cycle_lock.locked()

    def _set_phase(self, phase: CyclePhase, now: datetime) -> None:
        prev = self.phase
        self.phase = phase
        log_event(self.logger, "Orchestrator", "PHASE", level=logging.DEBUG, now=now,
                  phase=phase.value, previous=prev.value)

    def run_cycle(self) -> bool:
        """Run one refresh cycle. Returns False when another cycle is in flight."""
        if not self._cycle_lock.acquire(blocking=False):
            return False
        try:
            state = self._cycle()
        finally:
            self._cycle_lock.release()

        self._notify(state)
        return True

    def trigger(self) -> bool:
        """Manual refresh. Ignored while a cycle is already running."""
        started = self.run_cycle()
        if not started:
            log_event(self.logger, "Orchestrator", "MANUAL_TRIGGER_IGNORED", now=self.clock(),
                      phase=self.phase.value)
        return started

    def _cycle(self) -> DashboardState:
        now = self.clock()
        try:
            self._set_phase(CyclePhase.FETCHING, now)
            batch = self.fetcher.retry_fetch(self.config.category, max_retries=self.config.max_retries)

            self._set_phase(CyclePhase.ANALYZING, now)
            snapshot = self.analyzer.analyze(batch.articles, now=now)

            self._set_phase(CyclePhase.UPDATING, now)
            # metrics see the window as it will be after the append; history only grows on success
            window = (self.history.values() + [snapshot.overall_sentiment])[-self.history.capacity:]
            metrics = compute_market_metrics(snapshot, window, batch.articles)
            self.history.append(snapshot)

            state = DashboardState(
                phase=CyclePhase.IDLE,
                snapshot=snapshot,
                metrics=metrics,
                history=tuple(self.history.points()),
                article_count=len(batch.articles),
                error=None,
                last_success_at=now,
                updated_at=now,
            )
            self._set_phase(CyclePhase.IDLE, now)
            log_event(
                self.logger,
                "Orchestrator",
                "CYCLE_OK",
                now=now,
                articles=len(batch.articles),
                sentiment=round(snapshot.overall_sentiment, 4),
                history_len=len(self.history),
                momentum=metrics.market_momentum,
                structure=metrics.market_structure,
            )
        except Exception as e:
            failed_in = self.phase
            self._set_phase(CyclePhase.FAILED, now)
            with self._state_lock:
                previous = self._state
            state = replace(previous, phase=CyclePhase.FAILED, error=str(e) or type(e).__name__, updated_at=now)
            log_event(
                self.logger,
                "Orchestrator",
                "CYCLE_FAILED",
                level=logging.ERROR,
                now=now,
                stage=failed_in.value,
                error_type=type(e).__name__,
                error=str(e),
                stale_data_kept=previous.has_data,
            )

        with self._state_lock:
            self._state = state
        return state

    def _notify(self, state: DashboardState) -> None:
        with self._state_lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(state)
            except Exception as e:
                self.logger.error(f"[Orchestrator] Subscriber {callback!r} failed: {e}")

    def start(self) -> None:
        """Start the refresh thread: one cycle now, then one per interval."""
        if self._thread is not None:
            return
        # fresh event per run: a thread left over from a timed-out stop keeps its own, already set
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._loop, args=(self._stop_event,), name="sentimetrics-refresh", daemon=True
        )
        self._thread.start()
        self.logger.info(
            f"[Orchestrator] Started refresh loop (every {self.config.refresh_interval_seconds:g}s)"
        )

    def stop(self) -> None:
        """Cancel future cycles. An in-flight cycle finishes before the thread exits."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout=self.config.stop_timeout_seconds)
        if self._thread.is_alive():
            self.logger.warning(
                f"[Orchestrator] Refresh thread still finishing a cycle after "
                f"{self.config.stop_timeout_seconds:g}s; it will exit without scheduling another"
            )
        self._thread = None
        self.logger.info("[Orchestrator] Refresh loop stopped")

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.run_cycle()
            except Exception as e:
                self.logger.error(f"[Orchestrator] Refresh loop error: {e}")
            if stop_event.wait(self.config.refresh_interval_seconds):
                break
