TEAM_SIZE_BY_SPORT = {
    "THREE": 3,
    "FIVE": 5,
    "EIGHT": 8,
    "ELEVEN": 11,
}


def per_team_size(sport: str) -> int:
    try:
        return TEAM_SIZE_BY_SPORT[sport]
    except KeyError:
        raise ValueError(f"unknown sport: {sport}") from None


def starters_cap(sport: str) -> int:
    return per_team_size(sport) * 2
