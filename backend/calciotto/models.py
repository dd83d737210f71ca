
from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

from .utils import now_utc


Base = declarative_base()


class Player(Base):
    __tablename__ = "players"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, default="")
    surname = Column(String, nullable=False, default="")
    phone = Column(String, nullable=True, unique=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.surname}".strip() or f"#{self.id}"


class PlayerRatings(Base):
    __tablename__ = "player_ratings"
    player_id = Column(Integer, ForeignKey("players.id"), primary_key=True)
    defense = Column(Integer, nullable=False)
    attack = Column(Integer, nullable=False)
    speed = Column(Integer, nullable=False)
    power = Column(Integer, nullable=False)
    technique = Column(Integer, nullable=False)
    shot = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=now_utc, nullable=False)


class Match(Base):
    __tablename__ = "matches"
    id = Column(Integer, primary_key=True)
    sport = Column(String, nullable=False)
    date_time = Column(String, nullable=False)
    location = Column(String, nullable=False)
    status = Column(String, nullable=False, default="OPEN")
    team_name_light = Column(String, nullable=True)
    team_name_dark = Column(String, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)


class Signup(Base):
    __tablename__ = "signups"
    __table_args__ = (UniqueConstraint("match_id", "player_id"),)
    id = Column(Integer, primary_key=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    status = Column(String, nullable=False)  # "STARTER" | "RESERVE" | "NEXT"
    reserve_team = Column(String, nullable=True)  # "LIGHT" | "DARK"
    created_at = Column(DateTime, default=now_utc, nullable=False)


class Team(Base):
    __tablename__ = "teams"
    id = Column(Integer, primary_key=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    side = Column(String, nullable=False)
    created_at = Column(DateTime, default=now_utc, nullable=False)


class TeamAssignment(Base):
    __tablename__ = "team_assignments"
    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)


class LineupVersion(Base):
    __tablename__ = "lineup_versions"
    id = Column(Integer, primary_key=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False)
    ordinal = Column(Integer, nullable=False)
    variant_type = Column(String, nullable=False)
    algorithm = Column(String, nullable=False)
    seed = Column(BigInteger, nullable=True)
    score = Column(Float, nullable=False, default=0)
    mean_delta = Column(Float, nullable=False, default=0)
    is_recommended = Column(Boolean, nullable=False, default=False)
    is_applied = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=now_utc, nullable=False)


class LineupAssignment(Base):
    __tablename__ = "lineup_assignments"
    id = Column(Integer, primary_key=True)
    lineup_version_id = Column(Integer, ForeignKey("lineup_versions.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    team_side = Column(String, nullable=False)
