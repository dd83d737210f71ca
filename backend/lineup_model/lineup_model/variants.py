from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .balance import balance_greedy_local
from .config import Config
from .scoring import mean_delta
from .types import VARIANT_TYPES, RatedPlayer, VariantCandidate


def swap_round_budgets(cfg: Config) -> List[int]:
    return [max(1, cfg.max_swap_rounds - idx * cfg.swap_rounds_step) for idx in range(cfg.variant_count)]


def rank_candidates(candidates: Sequence[VariantCandidate]) -> List[VariantCandidate]:
    ordered = sorted(candidates, key=lambda c: c.mean_delta)
    return [replace(c, variant_type=VARIANT_TYPES[idx]) for idx, c in enumerate(ordered[: len(VARIANT_TYPES)])]


def generate_candidates(
    players: Sequence[RatedPlayer],
    per_team_size: int,
    seed_base: int,
    cfg: Optional[Config] = None,
) -> List[VariantCandidate]:
    """Run the greedy-local balancer once per variant slot and rank the results.

    Each run gets its own seed (``seed_base + idx``) and swap-round budget so
    the candidates differ.
    """
    cfg = cfg or Config()
    by_id: Dict[str, RatedPlayer] = {p.player_id: p for p in players}
    candidates = []
    for idx, rounds in enumerate(swap_round_budgets(cfg)):
        result = balance_greedy_local(players, per_team_size, seed_base + idx, max_swap_rounds=rounds, cfg=cfg)
        delta = mean_delta([by_id[p] for p in result.light], [by_id[p] for p in result.dark])
        candidates.append(VariantCandidate(result=result, mean_delta=delta, max_swap_rounds=rounds))
    return rank_candidates(candidates)
