from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

RATING_MIN = 1
RATING_MAX = 5

AXES: Tuple[str, ...] = ("defense", "attack", "speed", "power", "technique", "shot")

ALGO_GREEDY_LOCAL = "GREEDY_LOCAL"
ALGO_RANDOM_SEEDED = "RANDOM_SEEDED"
ALGO_MANUAL = "MANUAL"

VARIANT_TYPES: Tuple[str, ...] = ("V1", "V2", "V3")
MANUAL_VARIANT_TYPE = "V4"


@dataclass(frozen=True)
class RatedPlayer:
    player_id: str
    defense: int
    attack: int
    speed: int
    power: int
    technique: int
    shot: int

    def __post_init__(self) -> None:
        for axis in AXES:
            value = getattr(self, axis)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{axis} rating must be an integer, got {value!r}")
            if not RATING_MIN <= value <= RATING_MAX:
                raise ValueError(f"{axis} rating out of range: {value}")

    @classmethod
    def from_ratings(cls, player_id: str, ratings: Mapping[str, int]) -> "RatedPlayer":
        missing = [axis for axis in AXES if axis not in ratings]
        if missing:
            raise ValueError(f"missing ratings: {', '.join(missing)}")
        return cls(player_id=str(player_id), **{axis: ratings[axis] for axis in AXES})

    @property
    def ratings(self) -> Dict[str, int]:
        return {axis: getattr(self, axis) for axis in AXES}

    @property
    def mean(self) -> float:
        return sum(getattr(self, axis) for axis in AXES) / len(AXES)


@dataclass(frozen=True)
class BalanceResult:
    light: List[str]
    dark: List[str]
    score: float
    light_axis_means: Dict[str, float]
    dark_axis_means: Dict[str, float]
    algorithm: str
    seed: Optional[int] = None
    swap_rounds: int = 0


@dataclass(frozen=True)
class VariantCandidate:
    result: BalanceResult
    mean_delta: float
    max_swap_rounds: int = 0
    variant_type: str = ""

    @property
    def seed(self) -> Optional[int]:
        return self.result.seed
