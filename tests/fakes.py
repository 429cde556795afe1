"""Deterministic stand-ins for the noise oracle and random source."""

from typing import Callable, Iterable, List


class ConstantNoise:
    """Same sample everywhere."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def sample(self, point) -> float:
        self.calls += 1
        return self.value


class FunctionNoise:
    """Noise defined by a plain function of the coordinates."""

    def __init__(self, fn: Callable[[float, float], float]):
        self.fn = fn

    def sample(self, point) -> float:
        return self.fn(point.x, point.y)


class ScriptedRandom:
    """Replays fixed sequences of draws; falls back to fixed values when exhausted."""

    def __init__(self, reals: Iterable[float] = (), ints: Iterable[int] = (),
                 default_real: float = 0.99, default_int: int = 0):
        self.reals: List[float] = list(reals)
        self.ints: List[int] = list(ints)
        self.default_real = default_real
        self.default_int = default_int
        self.int_requests: List[int] = []

    def uniform_real(self) -> float:
        if self.reals:
            return self.reals.pop(0)
        return self.default_real

    def uniform_int(self, n: int) -> int:
        self.int_requests.append(n)
        if self.ints:
            return self.ints.pop(0) % n
        return min(self.default_int, n - 1)
