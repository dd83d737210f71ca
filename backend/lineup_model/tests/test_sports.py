import pytest

from lineup_model import per_team_size, starters_cap


def test_team_sizes():
    assert per_team_size("THREE") == 3
    assert per_team_size("ELEVEN") == 11
    assert starters_cap("FIVE") == 10
    assert starters_cap("EIGHT") == 16


def test_unknown_sport():
    with pytest.raises(ValueError, match="unknown sport"):
        per_team_size("SEVEN")
