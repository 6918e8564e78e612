"""Asyncio event loop for the interactive navigator.

Stdin is registered with ``loop.add_reader``; every decoded key goes to the
dispatcher, async operations run as tasks, and the screen is redrawn after
any state or cache change. Terminal size is re-read for every frame.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Awaitable, Callable
from typing import Protocol

from ..input.dispatcher import InputDispatcher
from ..input.keys import KeyReader

log = logging.getLogger(__name__)


class FrameSink(Protocol):
    def write(self, data: str) -> None: ...


class RuntimeLoop:
    """Own the running tasks and the redraw signal for one session."""

    def __init__(self, output: FrameSink, reader: KeyReader) -> None:
        self._output = output
        self._reader = reader
        self._wake = asyncio.Event()
        self._dirty = True
        self._tasks: set[asyncio.Task] = set()
        self._dispatcher: InputDispatcher | None = None

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def request_redraw(self) -> None:
        self._dirty = True
        self._wake.set()

    def spawn(self, operation: Awaitable[object]) -> None:
        """Schedule ``operation`` on the running loop and redraw when it ends."""
        task = asyncio.ensure_future(operation)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("Navigation task failed", exc_info=task.exception())
        self.request_redraw()

    def _on_readable(self) -> None:
        dispatcher = self._dispatcher
        if dispatcher is None:
            return
        key = self._reader.read_key()
        while key:
            dispatcher.handle_key(key)
            if dispatcher.quit_requested:
                break
            key = self._reader.read_key(timeout_ms=0)
        self.request_redraw()

    async def run(self, dispatcher: InputDispatcher, render: Callable[[], str]) -> None:
        """Dispatch input and redraw until the dispatcher asks to quit."""
        loop = asyncio.get_running_loop()
        self._dispatcher = dispatcher
        loop.add_reader(self._reader.fd, self._on_readable)
        try:
            loop.add_signal_handler(signal.SIGWINCH, self.request_redraw)
        except (NotImplementedError, RuntimeError, ValueError):
            log.debug("SIGWINCH handler unavailable; resizes apply on next input")
        try:
            while not dispatcher.quit_requested:
                if self._dirty:
                    self._dirty = False
                    self._output.write(render())
                await self._wake.wait()
                self._wake.clear()
        finally:
            loop.remove_reader(self._reader.fd)
            try:
                loop.remove_signal_handler(signal.SIGWINCH)
            except (NotImplementedError, RuntimeError, ValueError):
                pass
            await self.cancel_tasks()
            self._dispatcher = None

    async def cancel_tasks(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)


__all__ = ["FrameSink", "RuntimeLoop"]
