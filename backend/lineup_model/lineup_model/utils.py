from typing import Callable, Iterable

from .config import Config


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def seeded_random(seed: int, cfg: Config) -> Callable[[], float]:
    """Linear congruential generator yielding floats in [0, 1).

    The same seed always produces the same sequence.
    """
    state = seed

    def draw() -> float:
        nonlocal state
        state = (state * cfg.lcg_multiplier + cfg.lcg_increment) % cfg.lcg_modulus
        return state / cfg.lcg_modulus

    return draw
