from typing import Dict, Sequence, Tuple

from .config import Config
from .types import AXES, RatedPlayer
from .utils import mean


def axis_means(players: Sequence[RatedPlayer]) -> Tuple[Dict[str, float], float]:
    n = max(len(players), 1)
    means = {axis: sum(getattr(p, axis) for p in players) / n for axis in AXES}
    team_mean = sum(p.mean for p in players) / n
    return means, team_mean


def score_teams(
    axis_a: Dict[str, float],
    axis_b: Dict[str, float],
    mean_a: float,
    mean_b: float,
    cfg: Config,
) -> float:
    axis_delta = sum(abs(axis_a[axis] - axis_b[axis]) for axis in AXES)
    return cfg.axis_weight * axis_delta + cfg.mean_weight * abs(mean_a - mean_b)


def split_score(team_a: Sequence[RatedPlayer], team_b: Sequence[RatedPlayer], cfg: Config) -> float:
    axis_a, mean_a = axis_means(team_a)
    axis_b, mean_b = axis_means(team_b)
    return score_teams(axis_a, axis_b, mean_a, mean_b, cfg)


def mean_delta(light: Sequence[RatedPlayer], dark: Sequence[RatedPlayer]) -> float:
    return abs(mean(p.mean for p in light) - mean(p.mean for p in dark))
