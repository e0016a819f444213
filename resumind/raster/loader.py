"""Single-flight lazy loader for the page rendering engine.

State machine::

    ABSENT --acquire--> INITIALIZING --ok--> READY
                             |
                             +--error--> FAILED --acquire--> INITIALIZING

An attempt runs on its own thread and publishes its outcome through one
``concurrent.futures.Future``. Every ``acquire()`` made while INITIALIZING,
from any thread or event loop, awaits that same future, so the engine is
initialized at most once at a time per process. READY is terminal for the
process; FAILED is never returned to callers as a cached outcome.
"""

import asyncio
import threading
from collections.abc import Callable
from concurrent.futures import Future
from enum import Enum

from resumind.logging.logger import Log
from resumind.raster.base import BaseRasterEngine
from resumind.raster.exceptions import EngineUnavailableError


class EngineState(Enum):
    ABSENT = "absent"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class RasterEngineLoader:
    """Lazily creates and initializes one engine, shared by every caller."""

    def __init__(self, factory: Callable[[], BaseRasterEngine]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._state = EngineState.ABSENT
        self._handle: BaseRasterEngine | None = None
        self._pending: Future[BaseRasterEngine] | None = None
        self._last_error = ""
        self._attempts = 0

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def attempts(self) -> int:
        """Number of initialization attempts started so far."""
        return self._attempts

    @property
    def last_error(self) -> str:
        return self._last_error

    async def acquire(self) -> BaseRasterEngine:
        """Return the initialized engine, initializing it on first use.

        A cancelled caller stops waiting; the shared attempt keeps running.

        Raises:
            EngineUnavailableError: if the initialization attempt this call
                joined (or started) failed.
        """
        with self._lock:
            if self._state is EngineState.READY and self._handle is not None:
                return self._handle
            pending = self._pending if self._pending is not None else self._start()
        return await asyncio.wrap_future(pending)

    def reset(self) -> None:
        """Drop any cached engine and return to ABSENT.

        An attempt still in flight finishes for its waiters but no longer
        updates the loader.
        """
        with self._lock:
            self._state = EngineState.ABSENT
            self._handle = None
            self._pending = None
            self._last_error = ""

    def _start(self) -> "Future[BaseRasterEngine]":
        # Caller holds self._lock.
        future: Future[BaseRasterEngine] = Future()
        # RUNNING futures cannot be cancelled by a waiter giving up.
        future.set_running_or_notify_cancel()
        self._state = EngineState.INITIALIZING
        self._pending = future
        self._attempts += 1
        Log.info(f"Initializing PDF rendering engine (attempt {self._attempts})")
        threading.Thread(
            target=self._initialize,
            args=(future,),
            name="raster-engine-init",
            daemon=True,
        ).start()
        return future

    def _initialize(self, future: "Future[BaseRasterEngine]") -> None:
        try:
            engine = self._create()
        except Exception as exc:
            Log.error(f"Failed to load PDF rendering engine: {exc}")
            error = EngineUnavailableError(f"Failed to load PDF rendering engine: {exc}")
            error.__cause__ = exc
            with self._lock:
                if self._pending is future:
                    self._state = EngineState.FAILED
                    self._handle = None
                    self._pending = None
                    self._last_error = str(exc)
            future.set_exception(error)
            return

        with self._lock:
            if self._pending is future:
                self._handle = engine
                self._state = EngineState.READY
                self._pending = None
        Log.info(f"PDF rendering engine ready: {type(engine).__name__}")
        future.set_result(engine)

    def _create(self) -> BaseRasterEngine:
        engine = self._factory()
        engine.initialize()
        return engine
