from .balance import (
    balance_greedy_local,
    balance_random_seeded,
    evaluate_split,
    suggest_quick_swaps,
)
from .config import Config
from .scoring import axis_means, mean_delta, score_teams, split_score
from .sports import per_team_size, starters_cap
from .types import AXES, BalanceResult, RatedPlayer, VariantCandidate
from .variants import generate_candidates, rank_candidates

__all__ = [
    "AXES",
    "BalanceResult",
    "Config",
    "RatedPlayer",
    "VariantCandidate",
    "axis_means",
    "balance_greedy_local",
    "balance_random_seeded",
    "evaluate_split",
    "generate_candidates",
    "mean_delta",
    "per_team_size",
    "rank_candidates",
    "score_teams",
    "split_score",
    "starters_cap",
    "suggest_quick_swaps",
]
