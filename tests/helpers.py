"""Shared test helpers for Countdown."""

from countdown.timer.scheduler import Scheduler


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class ManualScheduler(Scheduler):
    """Deterministic scheduler: ticks only when the test says so."""

    def __init__(self):
        super().__init__()
        self.callbacks: dict[int, object] = {}
        self.start_calls = 0
        self.stop_calls = 0
        self.last_callback = None

    @property
    def active_count(self) -> int:
        return len(self.callbacks)

    def start(self, on_tick):
        self.start_calls += 1
        token = self._next_token()
        self.callbacks[token] = on_tick
        self.last_callback = on_tick
        return token

    def stop(self, handle):
        self.stop_calls += 1
        self.callbacks.pop(handle, None)

    def advance(self, elapsed_ms: int, times: int = 1) -> None:
        """Deliver *times* ticks of *elapsed_ms* to every live subscriber."""
        for _ in range(times):
            for callback in list(self.callbacks.values()):
                callback(elapsed_ms)
