from lineup_model import RatedPlayer, evaluate_split, suggest_quick_swaps


def _players() -> dict[str, RatedPlayer]:
    values = {"A": 5, "B": 5, "C": 4, "D": 1, "E": 2, "F": 1}
    return {pid: RatedPlayer(pid, *([value] * 6)) for pid, value in values.items()}


def test_evaluate_split():
    evaluation = evaluate_split(_players(), ["A", "B", "C"], ["D", "E", "F"])
    assert evaluation["light_mean"] > evaluation["dark_mean"]
    assert evaluation["mean_delta"] == evaluation["light_mean"] - evaluation["dark_mean"]
    assert evaluation["axis_means"]["light"]["shot"] == evaluation["light_mean"]


def test_swaps_improve_lopsided_split():
    players = _players()
    base = evaluate_split(players, ["A", "B", "C"], ["D", "E", "F"])
    swaps = suggest_quick_swaps(players, ["A", "B", "C"], ["D", "E", "F"], top_n=3)
    assert 0 < len(swaps) <= 3
    assert all(s["score"] < base["score"] for s in swaps)
    assert swaps[0]["score_delta"] <= swaps[-1]["score_delta"]


def test_no_swaps_for_balanced_split():
    players = {pid: RatedPlayer(pid, 3, 3, 3, 3, 3, 3) for pid in "ABCD"}
    assert suggest_quick_swaps(players, ["A", "B"], ["C", "D"]) == []
