import threading

import pytest

from fides.services.churches.throttle import RequestThrottle


class SteppingClock:
    def __init__(self, now: float = 50.0):
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_first_request_goes_out_immediately():
    clock = SteppingClock()
    throttle = RequestThrottle(1.1, clock=clock, sleep=clock.sleep)

    assert throttle.wait() == 0.0
    assert clock.sleeps == []


def test_sleeps_off_only_the_remaining_interval():
    clock = SteppingClock()
    throttle = RequestThrottle(1.1, clock=clock, sleep=clock.sleep)

    throttle.wait()
    clock.now += 0.5
    delay = throttle.wait()

    assert delay == pytest.approx(0.6)
    assert clock.sleeps == [pytest.approx(0.6)]


def test_no_wait_once_interval_has_passed():
    clock = SteppingClock()
    throttle = RequestThrottle(1.1, clock=clock, sleep=clock.sleep)

    throttle.wait()
    clock.now += 5
    throttle.wait()

    assert clock.sleeps == []


def test_concurrent_callers_are_spaced():
    throttle = RequestThrottle(0.05)
    threads = [threading.Thread(target=throttle.wait) for _ in range(4)]

    started = throttle.clock()
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert throttle.clock() - started >= 3 * 0.05 - 1e-3
