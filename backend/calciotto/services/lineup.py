import logging

from lineup_model import Config as LineupConfig
from lineup_model import evaluate_split, generate_candidates, mean_delta, per_team_size, suggest_quick_swaps
from lineup_model.types import ALGO_MANUAL, MANUAL_VARIANT_TYPE

from ..exceptions import (
    DuplicatePlayerError,
    IncompleteSplitError,
    NoStartersError,
    NotAStarterError,
    VariantNotFoundError,
)
from ..models import LineupAssignment, LineupVersion, TeamAssignment
from ..utils import now_ms
from .match import ensure_teams, get_match, load_rated_players, starter_signups
from .notify import VARIANTS_REGENERATED, Publisher, notify

logger = logging.getLogger(__name__)

MANUAL_ORDINAL = 4


def _delete_versions(db, versions: list[LineupVersion]) -> None:
    for version in versions:
        db.query(LineupAssignment).filter_by(lineup_version_id=version.id).delete()
        db.delete(version)
    db.flush()


def _clear_live_teams(db, teams: dict) -> None:
    for team in teams.values():
        db.query(TeamAssignment).filter_by(team_id=team.id).delete()


def _persist_version(
    db,
    match_id: int,
    ordinal: int,
    variant_type: str,
    algorithm: str,
    seed: int | None,
    score: float,
    delta: float,
    light: list[int],
    dark: list[int],
    recommended: bool,
) -> LineupVersion:
    version = LineupVersion(
        match_id=match_id,
        ordinal=ordinal,
        variant_type=variant_type,
        algorithm=algorithm,
        seed=seed,
        score=score,
        mean_delta=delta,
        is_recommended=recommended,
        is_applied=False,
    )
    db.add(version)
    db.flush()
    for side, player_ids in (("LIGHT", light), ("DARK", dark)):
        for player_id in player_ids:
            db.add(LineupAssignment(lineup_version_id=version.id, player_id=player_id, team_side=side))
    db.flush()
    return version


def _as_player_id(raw) -> int | None:
    if isinstance(raw, bool):
        return None
    try:
        return int(str(raw))
    except ValueError:
        return None


def _validated_split(
    db,
    match_id: int,
    light_ids: list,
    dark_ids: list,
    require_complete: bool = True,
) -> tuple[list[int], list[int]]:
    starter_ids = [s.player_id for s in starter_signups(db, match_id)]
    starters = set(starter_ids)
    seen: set[int] = set()
    sides = []
    for raw_ids in (light_ids, dark_ids):
        side = []
        for raw in raw_ids:
            player_id = _as_player_id(raw)
            if player_id is None or player_id not in starters:
                raise NotAStarterError(player_id=raw)
            if player_id in seen:
                raise DuplicatePlayerError(player_id=raw)
            seen.add(player_id)
            side.append(player_id)
        sides.append(side)
    if require_complete:
        missing = [p for p in starter_ids if p not in seen]
        if missing:
            raise IncompleteSplitError(player_id=missing[0])
    return sides[0], sides[1]


def generate_variants(
    db,
    match_id: int,
    seed_base: int | None = None,
    cfg: LineupConfig | None = None,
    commit: bool = True,
) -> list[int]:
    """Replace every variant of the match with freshly balanced V1..V3.

    All inputs are validated before anything is deleted. V1, the candidate
    with the smallest mean delta, is the only recommended one.
    """
    cfg = cfg or LineupConfig()
    match = get_match(db, match_id, for_update=True)
    starters = starter_signups(db, match_id)
    if not starters:
        raise NoStartersError()
    rated = load_rated_players(db, [s.player_id for s in starters])
    if seed_base is None:
        seed_base = now_ms()
    candidates = generate_candidates(rated, per_team_size(match.sport), seed_base, cfg)

    _delete_versions(db, db.query(LineupVersion).filter_by(match_id=match_id).all())
    variant_ids = []
    for ordinal, candidate in enumerate(candidates, start=1):
        version = _persist_version(
            db,
            match_id=match_id,
            ordinal=ordinal,
            variant_type=candidate.variant_type,
            algorithm=candidate.result.algorithm,
            seed=candidate.seed,
            score=candidate.result.score,
            delta=candidate.mean_delta,
            light=[int(p) for p in candidate.result.light],
            dark=[int(p) for p in candidate.result.dark],
            recommended=ordinal == 1,
        )
        variant_ids.append(version.id)
        logger.debug(
            "match %s %s: seed=%s rounds=%s score=%.4f mean_delta=%.4f",
            match_id,
            candidate.variant_type,
            candidate.seed,
            candidate.result.swap_rounds,
            candidate.result.score,
            candidate.mean_delta,
        )
    if commit:
        db.commit()
    logger.info("match %s: generated %d variants from %d starters", match_id, len(variant_ids), len(rated))
    return variant_ids


def apply_variant(db, variant_id: int, commit: bool = True) -> None:
    """Copy a variant into the live team assignments and mark it as applied."""
    version = db.query(LineupVersion).filter_by(id=variant_id).one_or_none()
    if version is None:
        raise VariantNotFoundError()
    get_match(db, version.match_id)

    teams = ensure_teams(db, version.match_id)
    assignments = (
        db.query(LineupAssignment)
        .filter_by(lineup_version_id=version.id)
        .order_by(LineupAssignment.id.asc())
        .all()
    )
    _clear_live_teams(db, teams)
    for assignment in assignments:
        db.add(TeamAssignment(team_id=teams[assignment.team_side].id, player_id=assignment.player_id))

    for other in db.query(LineupVersion).filter_by(match_id=version.match_id).all():
        other.is_applied = other.id == version.id
    if commit:
        db.commit()
    logger.info("match %s: applied %s (variant %s)", version.match_id, version.variant_type, version.id)


def save_manual_variant(db, match_id: int, light_ids: list, dark_ids: list, commit: bool = True) -> dict:
    get_match(db, match_id)
    light, dark = _validated_split(db, match_id, light_ids, dark_ids)
    by_id = {int(p.player_id): p for p in load_rated_players(db, light + dark)}
    delta = mean_delta([by_id[p] for p in light], [by_id[p] for p in dark])

    previous = db.query(LineupVersion).filter_by(match_id=match_id, variant_type=MANUAL_VARIANT_TYPE).all()
    _delete_versions(db, previous)
    version = _persist_version(
        db,
        match_id=match_id,
        ordinal=MANUAL_ORDINAL,
        variant_type=MANUAL_VARIANT_TYPE,
        algorithm=ALGO_MANUAL,
        seed=None,
        score=0.0,
        delta=delta,
        light=light,
        dark=dark,
        recommended=False,
    )
    variant_id = version.id
    if commit:
        db.commit()
    logger.info("match %s: saved manual variant %s (mean_delta=%.3f)", match_id, variant_id, delta)
    return {"variant_id": variant_id, "mean_delta": delta}


def evaluate_manual_split(
    db,
    match_id: int,
    light_ids: list,
    dark_ids: list,
    top_n: int = 3,
    cfg: LineupConfig | None = None,
    require_complete: bool = False,
) -> dict:
    """Score a candidate split and suggest improving swaps. Nothing is persisted.

    Partial splits are accepted unless require_complete is set, so a lineup
    can be scored while it is still being drawn up.
    """
    cfg = cfg or LineupConfig()
    get_match(db, match_id)
    light, dark = _validated_split(db, match_id, light_ids, dark_ids, require_complete=require_complete)
    players = {p.player_id: p for p in load_rated_players(db, light + dark)}
    light_keys = [str(p) for p in light]
    dark_keys = [str(p) for p in dark]

    evaluation = evaluate_split(players, light_keys, dark_keys, cfg)
    swaps = suggest_quick_swaps(players, light_keys, dark_keys, top_n=top_n, cfg=cfg)
    return {
        "light": light,
        "dark": dark,
        "score": evaluation["score"],
        "mean_delta": evaluation["mean_delta"],
        "light_mean": evaluation["light_mean"],
        "dark_mean": evaluation["dark_mean"],
        "axis_means": evaluation["axis_means"],
        "swaps": [
            {
                "swap": [int(p) for p in swap["swap"]],
                "light": [int(p) for p in swap["light"]],
                "dark": [int(p) for p in swap["dark"]],
                "score": swap["score"],
                "score_delta": swap["score_delta"],
                "mean_delta": swap["mean_delta"],
            }
            for swap in swaps
        ],
    }


def list_variants(db, match_id: int) -> list[dict]:
    get_match(db, match_id)
    versions = db.query(LineupVersion).filter_by(match_id=match_id).order_by(LineupVersion.ordinal.asc()).all()
    variants = []
    for version in versions:
        rows = (
            db.query(LineupAssignment)
            .filter_by(lineup_version_id=version.id)
            .order_by(LineupAssignment.id.asc())
            .all()
        )
        variants.append(
            {
                "id": version.id,
                "ordinal": version.ordinal,
                "type": version.variant_type,
                "algorithm": version.algorithm,
                "seed": version.seed,
                "score": version.score,
                "mean_delta": version.mean_delta,
                "recommended": version.is_recommended,
                "applied": version.is_applied,
                "light": [row.player_id for row in rows if row.team_side == "LIGHT"],
                "dark": [row.player_id for row in rows if row.team_side == "DARK"],
            }
        )
    return variants


def refresh_lineups(
    db,
    match_id: int,
    publisher: Publisher | None = None,
    seed_base: int | None = None,
    cfg: LineupConfig | None = None,
    clear_if_empty: bool = True,
) -> list[int]:
    """Regenerate V1..V3 and apply V1 in a single commit.

    With clear_if_empty, a match with no starters left gets its variants and
    live teams cleared; otherwise NoStartersError propagates.
    """
    get_match(db, match_id, for_update=True)
    if clear_if_empty and not starter_signups(db, match_id):
        _delete_versions(db, db.query(LineupVersion).filter_by(match_id=match_id).all())
        _clear_live_teams(db, ensure_teams(db, match_id))
        db.commit()
        logger.info("match %s: no starters left, lineups cleared", match_id)
        notify(publisher, match_id, VARIANTS_REGENERATED, variant_ids=[])
        return []

    variant_ids = generate_variants(db, match_id, seed_base=seed_base, cfg=cfg, commit=False)
    apply_variant(db, variant_ids[0], commit=False)
    db.commit()
    notify(publisher, match_id, VARIANTS_REGENERATED, variant_ids=variant_ids)
    return variant_ids
