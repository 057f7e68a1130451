# discord_lite/runtime.py
import logging
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .dispatcher import CommandDispatcher
from .events import Effect, Event
from .gateway import RemoteGateway
from .state import SessionState


class ClientRuntime:
    """
    Drives the dispatcher from one thread while effects run on a worker pool.

    Workers never touch the session; they post their result events to a queue
    that the driving thread drains one event at a time, in completion order.
    There is no cancellation: a superseded request still completes and its
    result is judged by the dispatcher.
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        dispatcher: Optional[CommandDispatcher] = None,
        max_workers: int = 4
    ):
        self.gateway = gateway
        self.dispatcher = dispatcher or CommandDispatcher()
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="discord-lite")
        self.results: "queue.Queue[Event]" = queue.Queue()
        self._in_flight = 0
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def state(self) -> SessionState:
        return self.dispatcher.state

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def dispatch(self, event: Event) -> None:
        """
        Applies an event now and starts every request it issues.
        """
        for effect in self.dispatcher.dispatch(event):
            self._submit(effect)

    def _submit(self, effect: Effect) -> None:
        with self._lock:
            self._in_flight += 1
        self.logger.debug("Starting %s.", type(effect).__name__)
        future = self.executor.submit(self.gateway.execute, effect)
        future.add_done_callback(self._on_done)

    def _on_done(self, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            # execute() reports gateway failures as events; anything else is a bug.
            self.logger.error("Request failed unexpectedly: %s", exc, exc_info=exc)
        else:
            self.results.put(future.result())
        with self._idle:
            self._in_flight -= 1
            self._idle.notify_all()

    def process_pending(self, timeout: Optional[float] = 0.0) -> int:
        """
        Applies queued result events on the calling thread.

        Args:
            timeout (Optional[float]): Seconds to wait for the first event; None waits indefinitely, 0 not at all.

        Returns:
            int: Number of events applied.
        """
        processed = 0
        block = timeout is None or timeout > 0
        while True:
            try:
                event = self.results.get(block=block, timeout=timeout)
            except queue.Empty:
                return processed
            self.dispatch(event)
            processed += 1
            block = False

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Applies results until no request is in flight and the queue is empty.

        Returns:
            bool: False if the timeout expired first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            self.process_pending()
            with self._idle:
                if self._in_flight == 0 and self.results.empty():
                    return True
                self._idle.wait(0.05)
            if deadline is not None and time.monotonic() >= deadline:
                return False

    def close(self) -> None:
        self.executor.shutdown(wait=True)

    def __enter__(self) -> "ClientRuntime":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
