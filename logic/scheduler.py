"""
Delayed callbacks for the computer's move.

Everything runs on one thread: a scheduler only remembers callbacks and
runs them later from the owner's event loop (Tk mainloop, console loop,
or a test calling advance()).
"""

import itertools
from typing import Callable, Dict, Optional, Tuple


class DeferredScheduler:
    """
    One-shot, cancelable delayed callbacks.

    Subclasses implement schedule() and cancel().
    """

    def schedule(self, delay_ms: int, callback: Callable[[], None]):
        """
        Run callback once after delay_ms.

        Returns:
            A token that can be passed to cancel().
        """
        raise NotImplementedError

    def cancel(self, token) -> None:
        """Forget a scheduled callback. Unknown or fired tokens are ignored."""
        raise NotImplementedError

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to run."""
        raise NotImplementedError


class TkScheduler(DeferredScheduler):
    """
    Scheduler backed by a Tk widget's after() / after_cancel().
    """

    def __init__(self, widget):
        """
        Args:
            widget: Any Tk widget, usually the root window.
        """
        self.widget = widget
        self._ids = set()

    def schedule(self, delay_ms: int, callback: Callable[[], None]):
        def run():
            self._ids.discard(after_id)
            callback()

        after_id = self.widget.after(delay_ms, run)
        self._ids.add(after_id)
        return after_id

    def cancel(self, token) -> None:
        if token in self._ids:
            self._ids.discard(token)
            self.widget.after_cancel(token)

    @property
    def pending(self) -> int:
        return len(self._ids)


class ManualScheduler(DeferredScheduler):
    """
    Scheduler with a virtual clock.

    Time only moves when advance() is called, which makes delayed moves
    easy to test and lets the console front end run them on demand.
    """

    def __init__(self):
        self.now_ms = 0
        self._counter = itertools.count(1)
        self._tasks: Dict[int, Tuple[int, Callable[[], None]]] = {}

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        token = next(self._counter)
        self._tasks[token] = (self.now_ms + max(0, delay_ms), callback)
        return token

    def cancel(self, token) -> None:
        self._tasks.pop(token, None)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def next_due_ms(self) -> Optional[int]:
        """Milliseconds until the earliest callback is due, or None."""
        if not self._tasks:
            return None
        due = min(due for due, _ in self._tasks.values())
        return max(0, due - self.now_ms)

    def advance(self, ms: int) -> int:
        """
        Move the clock forward and run everything that became due.

        Callbacks scheduled while running are only run if they are
        due within the same window.

        Returns:
            Number of callbacks run.
        """
        target = self.now_ms + ms
        ran = 0

        while True:
            due_tasks = [
                (due, token) for token, (due, _) in self._tasks.items()
                if due <= target
            ]
            if not due_tasks:
                break

            due, token = min(due_tasks)
            _, callback = self._tasks.pop(token)
            self.now_ms = max(self.now_ms, due)
            callback()
            ran += 1

        self.now_ms = target
        return ran

    def run_pending(self) -> int:
        """Run every outstanding callback, however far in the future."""
        ran = 0
        while self._tasks:
            ran += self.advance(self.next_due_ms())
        return ran
