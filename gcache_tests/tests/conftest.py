import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, initial: float = 0.0) -> None:
        self._value = initial

    def __call__(self) -> float:
        return self._value

    def advance(self, seconds: float) -> None:
        self._value += seconds

    def set(self, value: float) -> None:
        self._value = value


@pytest.fixture
def clock():
    return FakeClock()
