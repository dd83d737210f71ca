import logging

from lineup_model import RatedPlayer, axis_means, per_team_size, starters_cap

from ..config import Config
from ..exceptions import InvalidRatingsError, InvalidSportError, MatchNotFoundError, MissingRatingsError
from ..models import Match, PlayerRatings, Signup, Team, TeamAssignment

logger = logging.getLogger(__name__)

SIDES = ("LIGHT", "DARK")


def get_match(db, match_id: int, for_update: bool = False) -> Match:
    query = db.query(Match).filter_by(id=match_id)
    if for_update:
        query = query.with_for_update()
    match = query.one_or_none()
    if match is None:
        raise MatchNotFoundError()
    return match


def create_match(
    db,
    sport: str,
    date_time: str,
    location: str,
    team_name_light: str | None = None,
    team_name_dark: str | None = None,
) -> Match:
    try:
        per_team_size(sport)
    except ValueError:
        raise InvalidSportError(f"invalid_sport: {sport}") from None
    match = Match(
        sport=sport,
        date_time=date_time,
        location=location,
        status="OPEN",
        team_name_light=team_name_light or Config.TEAM_NAME_LIGHT,
        team_name_dark=team_name_dark or Config.TEAM_NAME_DARK,
    )
    db.add(match)
    db.flush()
    ensure_teams(db, match.id)
    db.commit()
    logger.info("match %s created (%s, %s)", match.id, sport, location)
    return match


def ensure_teams(db, match_id: int) -> dict[str, Team]:
    teams = {team.side: team for team in db.query(Team).filter_by(match_id=match_id).all()}
    for side in SIDES:
        if side not in teams:
            logger.info("creating %s team for match %s", side, match_id)
            teams[side] = Team(match_id=match_id, side=side)
            db.add(teams[side])
    db.flush()
    return teams


def starter_signups(db, match_id: int) -> list[Signup]:
    return (
        db.query(Signup)
        .filter_by(match_id=match_id, status="STARTER")
        .order_by(Signup.created_at.asc(), Signup.id.asc())
        .all()
    )


def rated_player(player_id: int, ratings: PlayerRatings) -> RatedPlayer:
    return RatedPlayer(
        player_id=str(player_id),
        defense=ratings.defense,
        attack=ratings.attack,
        speed=ratings.speed,
        power=ratings.power,
        technique=ratings.technique,
        shot=ratings.shot,
    )


def load_rated_players(db, player_ids: list[int]) -> list[RatedPlayer]:
    rows = {r.player_id: r for r in db.query(PlayerRatings).filter(PlayerRatings.player_id.in_(player_ids)).all()}
    rated = []
    for player_id in player_ids:
        ratings = rows.get(player_id)
        if ratings is None:
            raise MissingRatingsError(player_id=player_id)
        try:
            rated.append(rated_player(player_id, ratings))
        except ValueError as exc:
            raise InvalidRatingsError(f"invalid_ratings: {player_id}: {exc}", player_id=player_id) from exc
    return rated


def live_teams(db, match_id: int) -> dict:
    teams = {team.side: team for team in db.query(Team).filter_by(match_id=match_id).all()}
    result = {}
    for side in SIDES:
        team = teams.get(side)
        rows = db.query(TeamAssignment).filter_by(team_id=team.id).order_by(TeamAssignment.id.asc()).all() if team else []
        player_ids = [row.player_id for row in rows]
        rated = [
            rated_player(r.player_id, r)
            for r in db.query(PlayerRatings).filter(PlayerRatings.player_id.in_(player_ids)).all()
        ]
        means, team_mean = axis_means(rated)
        result[side.lower()] = {"players": player_ids, "axis_means": means, "mean": team_mean}
    return result


def serialize_match(db, match: Match) -> dict:
    signups = db.query(Signup).filter_by(match_id=match.id).order_by(Signup.created_at.asc(), Signup.id.asc()).all()
    return {
        "id": match.id,
        "sport": match.sport,
        "date_time": match.date_time,
        "location": match.location,
        "status": match.status,
        "team_name_light": match.team_name_light or Config.TEAM_NAME_LIGHT,
        "team_name_dark": match.team_name_dark or Config.TEAM_NAME_DARK,
        "starters_cap": starters_cap(match.sport),
        "signups": [
            {"player_id": s.player_id, "status": s.status, "reserve_team": s.reserve_team} for s in signups
        ],
        "teams": live_teams(db, match.id),
    }
