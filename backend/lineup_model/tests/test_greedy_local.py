import pytest

from lineup_model import Config, RatedPlayer, balance_greedy_local, split_score
from lineup_model.balance import greedy_seed, local_search


def _uniform(pid: str, value: int) -> RatedPlayer:
    return RatedPlayer(pid, *([value] * 6))


def _pool(n: int) -> list[RatedPlayer]:
    return [RatedPlayer(f"P{i}", *[(i * 3 + k * 2) % 5 + 1 for k in range(6)]) for i in range(n)]


def test_highs_and_lows_are_split():
    cfg = Config()
    players = [_uniform("H1", 5), _uniform("H2", 5), _uniform("H3", 5), _uniform("L1", 1), _uniform("L2", 1), _uniform("L3", 1)]
    naive = split_score(players[:3], players[3:], cfg)

    result = balance_greedy_local(players, 3, seed=17)

    assert result.score <= naive
    assert result.score == pytest.approx(6.0)
    highs = sorted(sum(1 for p in team if p.startswith("H")) for team in (result.light, result.dark))
    assert highs == [1, 2]


@pytest.mark.parametrize("size", [3, 5, 8, 11])
def test_partition_complete(size):
    players = _pool(size * 2)
    result = balance_greedy_local(players, size, seed=size)
    assert len(result.light) == size
    assert len(result.dark) == size
    assert sorted(result.light + result.dark) == sorted(p.player_id for p in players)


def test_overflow_goes_to_open_side():
    players = _pool(7)
    result = balance_greedy_local(players, 4, seed=3)
    assert sorted(len(team) for team in (result.light, result.dark)) == [3, 4]
    assert sorted(result.light + result.dark) == sorted(p.player_id for p in players)


def test_greedy_ties_go_to_light():
    cfg = Config()
    team_a, team_b = greedy_seed([_uniform("A", 3)], 3, seed=5, cfg=cfg)
    assert [p.player_id for p in team_a] == ["A"]
    assert team_b == []

    team_a, team_b = greedy_seed([_uniform(pid, 3) for pid in ("A", "B", "C")], 3, seed=5, cfg=cfg)
    assert (len(team_a), len(team_b)) == (2, 1)


def test_local_search_never_worsens_greedy():
    cfg = Config()
    for seed in range(10):
        players = _pool(16)
        team_a, team_b = greedy_seed(players, 8, seed, cfg)
        greedy = split_score(team_a, team_b, cfg)
        local_search(team_a, team_b, cfg.max_swap_rounds, cfg)
        assert split_score(team_a, team_b, cfg) <= greedy


def test_swap_round_cap():
    cfg = Config()
    team_a, team_b = greedy_seed(_pool(22), 11, 5, cfg)
    assert local_search(team_a, team_b, 1, cfg) == 1


def test_empty_pool():
    result = balance_greedy_local([], 5, seed=1)
    assert result.light == []
    assert result.dark == []
    assert result.score == 0.0


def test_same_seed_reproducible():
    players = _pool(10)
    assert balance_greedy_local(players, 5, seed=8) == balance_greedy_local(players, 5, seed=8)
