import pytest

from calciotto.exceptions import (
    DuplicatePlayerError,
    IncompleteSplitError,
    MatchNotFoundError,
    MissingRatingsError,
    NoStartersError,
    NotAStarterError,
    VariantNotFoundError,
)
from calciotto.models import LineupAssignment, LineupVersion, Match, Signup, TeamAssignment
from calciotto.services.lineup import (
    apply_variant,
    evaluate_manual_split,
    generate_variants,
    list_variants,
    refresh_lineups,
    save_manual_variant,
)
from calciotto.services.match import live_teams
from conftest import add_match, add_player, add_signup, add_starters

VALUES = [5, 4, 4, 3, 3, 3, 2, 2, 1, (5, 1, 5, 1, 5, 1)]


def test_generate_ranks_three_variants(db):
    match_id = add_match(db, "FIVE")
    starters = add_starters(db, match_id, VALUES)

    ids = generate_variants(db, match_id, seed_base=1000)
    variants = list_variants(db, match_id)

    assert ids == [v["id"] for v in variants]
    assert [v["type"] for v in variants] == ["V1", "V2", "V3"]
    assert [v["ordinal"] for v in variants] == [1, 2, 3]
    assert [v["recommended"] for v in variants] == [True, False, False]
    assert not any(v["applied"] for v in variants)
    assert {v["seed"] for v in variants} == {1000, 1001, 1002}
    assert all(v["algorithm"] == "GREEDY_LOCAL" for v in variants)
    deltas = [v["mean_delta"] for v in variants]
    assert deltas == sorted(deltas)
    for variant in variants:
        assert len(variant["light"]) == 5 and len(variant["dark"]) == 5
        assert sorted(variant["light"] + variant["dark"]) == sorted(starters)


def test_generate_replaces_previous_variants(db):
    match_id = add_match(db)
    add_starters(db, match_id, VALUES)

    generate_variants(db, match_id, seed_base=1)
    generate_variants(db, match_id, seed_base=2)

    assert db.query(LineupVersion).filter_by(match_id=match_id).count() == 3
    assert db.query(LineupAssignment).count() == 30


def test_generate_ignores_reserves(db):
    match_id = add_match(db, "THREE")
    starters = add_starters(db, match_id, [5, 4, 3, 2])
    reserve = add_player(db, 5)
    add_signup(db, match_id, reserve, "RESERVE", "LIGHT")

    generate_variants(db, match_id, seed_base=7)

    for variant in list_variants(db, match_id):
        assert reserve not in variant["light"] + variant["dark"]
        assert sorted(variant["light"] + variant["dark"]) == sorted(starters)


def test_generate_without_starters(db):
    match_id = add_match(db)
    add_signup(db, match_id, add_player(db), "RESERVE", "LIGHT")

    with pytest.raises(NoStartersError):
        generate_variants(db, match_id)
    assert db.query(LineupVersion).count() == 0


def test_generate_missing_ratings_keeps_previous_variants(db):
    match_id = add_match(db)
    add_starters(db, match_id, VALUES[:6])
    generate_variants(db, match_id, seed_base=3)
    unrated = add_player(db, ratings=None)
    add_signup(db, match_id, unrated, "STARTER")

    with pytest.raises(MissingRatingsError) as info:
        generate_variants(db, match_id, seed_base=4)

    assert info.value.player_id == unrated
    db.rollback()
    assert db.query(LineupVersion).filter_by(match_id=match_id).count() == 3


def test_generate_unknown_match(db):
    with pytest.raises(MatchNotFoundError):
        generate_variants(db, 999)


def test_apply_materializes_live_teams(db):
    match_id = add_match(db)
    add_starters(db, match_id, VALUES)
    ids = generate_variants(db, match_id, seed_base=11)

    apply_variant(db, ids[1])
    apply_variant(db, ids[1])

    variants = list_variants(db, match_id)
    teams = live_teams(db, match_id)
    assert teams["light"]["players"] == variants[1]["light"]
    assert teams["dark"]["players"] == variants[1]["dark"]
    assert db.query(TeamAssignment).count() == 10
    assert [v["applied"] for v in variants] == [False, True, False]
    assert [v["recommended"] for v in variants] == [True, False, False]

    apply_variant(db, ids[0])
    assert [v["applied"] for v in list_variants(db, match_id)] == [True, False, False]
    assert live_teams(db, match_id)["light"]["players"] == variants[0]["light"]


def test_apply_creates_missing_teams(db):
    match = Match(sport="THREE", date_time="2026-10-20T20:00", location="Campo", status="OPEN")
    db.add(match)
    db.commit()
    match_id = match.id
    add_starters(db, match_id, [5, 4, 3, 3, 2, 1])
    ids = generate_variants(db, match_id, seed_base=5)

    apply_variant(db, ids[0])

    teams = live_teams(db, match_id)
    assert len(teams["light"]["players"]) == 3
    assert len(teams["dark"]["players"]) == 3


def test_apply_unknown_variant(db):
    with pytest.raises(VariantNotFoundError):
        apply_variant(db, 12345)


def test_manual_variant_is_saved_once(db):
    match_id = add_match(db, "THREE")
    a, b, c, d = add_starters(db, match_id, [5, 5, 1, 1])

    saved = save_manual_variant(db, match_id, [a, b], [c, d])
    assert saved["mean_delta"] == pytest.approx(4.0)

    again = save_manual_variant(db, match_id, [a, c], [b, d])
    assert again["mean_delta"] == pytest.approx(0.0)

    manual = [v for v in list_variants(db, match_id) if v["type"] == "V4"]
    assert len(manual) == 1
    assert manual[0]["id"] == again["variant_id"]
    assert manual[0]["ordinal"] == 4
    assert manual[0]["algorithm"] == "MANUAL"
    assert manual[0]["score"] == 0
    assert manual[0]["recommended"] is False
    assert manual[0]["light"] == [a, c]


def test_manual_variant_keeps_generated_ones(db):
    match_id = add_match(db, "THREE")
    starters = add_starters(db, match_id, [5, 4, 3, 3, 2, 1])
    generate_variants(db, match_id, seed_base=9)

    save_manual_variant(db, match_id, starters[:3], [str(p) for p in starters[3:]])

    assert [v["type"] for v in list_variants(db, match_id)] == ["V1", "V2", "V3", "V4"]


def test_manual_variant_rejects_non_starter(db):
    match_id = add_match(db, "THREE")
    a, b = add_starters(db, match_id, [4, 2])
    reserve = add_player(db)
    add_signup(db, match_id, reserve, "RESERVE", "LIGHT")

    with pytest.raises(NotAStarterError) as info:
        save_manual_variant(db, match_id, [a, reserve], [b])

    assert info.value.player_id == reserve
    assert db.query(LineupVersion).count() == 0


def test_manual_variant_rejects_incomplete_split(db):
    match_id = add_match(db, "THREE")
    starters = add_starters(db, match_id, [5, 4, 3, 3, 2, 1])
    generate_variants(db, match_id, seed_base=13)

    with pytest.raises(IncompleteSplitError) as info:
        save_manual_variant(db, match_id, [starters[0]], [starters[1]])

    assert info.value.player_id == starters[2]
    assert [v["type"] for v in list_variants(db, match_id)] == ["V1", "V2", "V3"]


def test_manual_variant_rejects_duplicates(db):
    match_id = add_match(db, "THREE")
    a, b = add_starters(db, match_id, [4, 2])

    with pytest.raises(DuplicatePlayerError):
        save_manual_variant(db, match_id, [a, b], [b])


def test_evaluate_manual_split_suggests_swaps(db):
    match_id = add_match(db, "THREE")
    a, b, c, d = add_starters(db, match_id, [5, 5, 1, 1])

    evaluation = evaluate_manual_split(db, match_id, [a, b], [c, d])

    assert evaluation["light"] == [a, b]
    assert evaluation["mean_delta"] == pytest.approx(4.0)
    assert evaluation["score"] == pytest.approx(18.0)
    assert evaluation["swaps"]
    best = evaluation["swaps"][0]
    assert best["score"] == pytest.approx(0.0)
    assert best["score_delta"] < 0
    assert best["swap"][0] in (a, b) and best["swap"][1] in (c, d)


def test_evaluate_accepts_partial_split_unless_complete_required(db):
    match_id = add_match(db, "THREE")
    a, b, c, d = add_starters(db, match_id, [5, 5, 1, 1])

    evaluation = evaluate_manual_split(db, match_id, [a], [c])
    assert evaluation["mean_delta"] == pytest.approx(4.0)

    with pytest.raises(IncompleteSplitError):
        evaluate_manual_split(db, match_id, [a], [c], require_complete=True)


def test_refresh_applies_first_variant_and_notifies(db, publisher):
    match_id = add_match(db)
    add_starters(db, match_id, VALUES)

    ids = refresh_lineups(db, match_id, publisher=publisher, seed_base=21)

    variants = list_variants(db, match_id)
    assert [v["applied"] for v in variants] == [True, False, False]
    assert live_teams(db, match_id)["light"]["players"] == variants[0]["light"]
    topic, message = publisher.messages[-1]
    assert topic == f"match:{match_id}"
    assert message["type"] == "VARIANTS_REGENERATED"
    assert message["variant_ids"] == ids


def test_refresh_without_starters_clears_lineups(db, publisher):
    match_id = add_match(db)
    add_starters(db, match_id, VALUES[:4])
    refresh_lineups(db, match_id, seed_base=1)

    for signup in db.query(Signup).filter_by(match_id=match_id).all():
        signup.status = "NEXT"
    db.commit()

    assert refresh_lineups(db, match_id, publisher=publisher) == []
    assert list_variants(db, match_id) == []
    assert live_teams(db, match_id)["light"]["players"] == []
    assert publisher.types() == ["VARIANTS_REGENERATED"]


def test_refresh_can_require_starters(db):
    match_id = add_match(db)

    with pytest.raises(NoStartersError):
        refresh_lineups(db, match_id, clear_if_empty=False)
