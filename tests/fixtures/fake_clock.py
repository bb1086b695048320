"""Controllable clock for stopwatch tests."""


class FakeClock:
    """Callable clock returning seconds; advanced manually."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
