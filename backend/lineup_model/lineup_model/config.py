from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    axis_weight: float = 0.7
    mean_weight: float = 0.3

    greedy_jitter_width: float = 0.1
    swap_epsilon: float = 1e-9
    max_swap_rounds: int = 200

    variant_count: int = 3
    swap_rounds_step: int = 50

    lcg_multiplier: int = 9301
    lcg_increment: int = 49297
    lcg_modulus: int = 233280
