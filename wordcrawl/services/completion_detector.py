import queue
import time
from typing import Optional

DEFAULT_POLL_INTERVAL = 0.1


class CompletionDetector:
    """Decides when a crawl with no known item count has run out of work.

    `produced` starts at 1 for the seed and `completed` at 0. Every finished
    work item is reported as one message carrying its fan-out, so the
    completion and the items it enqueued are accounted for together. Only
    the collector loop in `wait` touches the counters; once
    `completed == produced` no item is queued or in flight and none can be
    produced again.
    """

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL):
        self._messages: "queue.Queue[int]" = queue.Queue()
        self._poll_interval = poll_interval
        self._produced = 1
        self._completed = 0

    @property
    def produced(self) -> int:
        return self._produced

    @property
    def completed(self) -> int:
        return self._completed

    def report(self, fan_out: int) -> None:
        """Signal that one work item finished after enqueuing `fan_out` new ones."""
        if fan_out < 0:
            raise ValueError("fan_out must be non-negative")
        self._messages.put(fan_out)

    def wait(self, stop_event=None, deadline: Optional[float] = None) -> bool:
        """Collect completion messages until all produced items completed.

        `deadline` is a `time.monotonic()` timestamp. Returns False if the
        stop event is set or the deadline passes first.
        """
        while self._completed < self._produced:
            if stop_event is not None and stop_event.is_set():
                return False
            if deadline is not None and time.monotonic() >= deadline:
                return False
            try:
                fan_out = self._messages.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            self._produced += fan_out
            self._completed += 1
        return True
