from typing import Dict, List, Optional, Sequence, Tuple

from .config import Config
from .scoring import axis_means, mean_delta, score_teams, split_score
from .types import ALGO_GREEDY_LOCAL, ALGO_RANDOM_SEEDED, BalanceResult, RatedPlayer
from .utils import seeded_random


def _result(
    team_a: List[RatedPlayer],
    team_b: List[RatedPlayer],
    algorithm: str,
    seed: Optional[int],
    cfg: Config,
    swap_rounds: int = 0,
) -> BalanceResult:
    axis_a, mean_a = axis_means(team_a)
    axis_b, mean_b = axis_means(team_b)
    return BalanceResult(
        light=[p.player_id for p in team_a],
        dark=[p.player_id for p in team_b],
        score=score_teams(axis_a, axis_b, mean_a, mean_b, cfg),
        light_axis_means=axis_a,
        dark_axis_means=axis_b,
        algorithm=algorithm,
        seed=seed,
        swap_rounds=swap_rounds,
    )


def balance_random_seeded(
    players: Sequence[RatedPlayer],
    per_team_size: int,
    seed: int,
    cfg: Optional[Config] = None,
) -> BalanceResult:
    """Seeded shuffle, then slice into two teams.

    Players beyond ``2 * per_team_size`` are left out of both teams.
    """
    cfg = cfg or Config()
    rng = seeded_random(seed, cfg)
    shuffled = sorted(players, key=lambda _: rng())
    team_a = shuffled[:per_team_size]
    team_b = shuffled[per_team_size : per_team_size * 2]
    return _result(team_a, team_b, ALGO_RANDOM_SEEDED, seed, cfg)


def greedy_seed(
    players: Sequence[RatedPlayer],
    per_team_size: int,
    seed: int,
    cfg: Config,
) -> Tuple[List[RatedPlayer], List[RatedPlayer]]:
    rng = seeded_random(seed, cfg)
    width = cfg.greedy_jitter_width
    ordered = sorted(players, key=lambda p: p.mean + (rng() - 0.5) * width, reverse=True)

    team_a: List[RatedPlayer] = []
    team_b: List[RatedPlayer] = []
    for player in ordered:
        if len(team_a) >= per_team_size:
            team_b.append(player)
            continue
        if len(team_b) >= per_team_size:
            team_a.append(player)
            continue
        score_a = split_score(team_a + [player], team_b, cfg)
        score_b = split_score(team_a, team_b + [player], cfg)
        if score_a <= score_b:
            team_a.append(player)
        else:
            team_b.append(player)
    return team_a, team_b


def local_search(
    team_a: List[RatedPlayer],
    team_b: List[RatedPlayer],
    max_swap_rounds: int,
    cfg: Config,
) -> int:
    """First-improvement pairwise swaps, in place. Returns the number of scans run."""
    current = split_score(team_a, team_b, cfg)
    rounds = 0
    improved = True
    while improved and rounds < max_swap_rounds:
        improved = False
        rounds += 1
        for i in range(len(team_a)):
            for j in range(len(team_b)):
                team_a[i], team_b[j] = team_b[j], team_a[i]
                candidate = split_score(team_a, team_b, cfg)
                if candidate + cfg.swap_epsilon < current:
                    current = candidate
                    improved = True
                else:
                    team_a[i], team_b[j] = team_b[j], team_a[i]
    return rounds


def balance_greedy_local(
    players: Sequence[RatedPlayer],
    per_team_size: int,
    seed: int,
    max_swap_rounds: Optional[int] = None,
    cfg: Optional[Config] = None,
) -> BalanceResult:
    cfg = cfg or Config()
    if max_swap_rounds is None:
        max_swap_rounds = cfg.max_swap_rounds
    team_a, team_b = greedy_seed(players, per_team_size, seed, cfg)
    rounds = local_search(team_a, team_b, max_swap_rounds, cfg)
    return _result(team_a, team_b, ALGO_GREEDY_LOCAL, seed, cfg, swap_rounds=rounds)


def evaluate_split(
    players: Dict[str, RatedPlayer],
    light: Sequence[str],
    dark: Sequence[str],
    cfg: Optional[Config] = None,
) -> dict:
    cfg = cfg or Config()
    team_a = [players[p] for p in light]
    team_b = [players[p] for p in dark]
    axis_a, mean_a = axis_means(team_a)
    axis_b, mean_b = axis_means(team_b)
    return {
        "light": list(light),
        "dark": list(dark),
        "score": score_teams(axis_a, axis_b, mean_a, mean_b, cfg),
        "mean_delta": mean_delta(team_a, team_b),
        "light_mean": mean_a,
        "dark_mean": mean_b,
        "axis_means": {"light": axis_a, "dark": axis_b},
    }


def suggest_quick_swaps(
    players: Dict[str, RatedPlayer],
    light: Sequence[str],
    dark: Sequence[str],
    top_n: int = 3,
    cfg: Optional[Config] = None,
) -> List[dict]:
    """Single light/dark swaps that lower the balance score, best first."""
    cfg = cfg or Config()
    base = evaluate_split(players, light, dark, cfg)

    swaps = []
    for a in light:
        for b in dark:
            team_a = [b if p == a else p for p in light]
            team_b = [a if p == b else p for p in dark]
            eval_split = evaluate_split(players, team_a, team_b, cfg)
            score_delta = eval_split["score"] - base["score"]
            if score_delta + cfg.swap_epsilon >= 0:
                continue
            swaps.append(
                {
                    "swap": (a, b),
                    "light": eval_split["light"],
                    "dark": eval_split["dark"],
                    "score": eval_split["score"],
                    "score_delta": score_delta,
                    "mean_delta": eval_split["mean_delta"],
                }
            )

    swaps.sort(key=lambda s: (s["score_delta"], s["mean_delta"]))
    return swaps[:top_n]
