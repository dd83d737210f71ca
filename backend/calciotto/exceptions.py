"""Error taxonomy for match, signup and lineup operations.

Every error carries a short ``code`` (returned to API clients) and the HTTP
``status`` the app maps it to. They subclass ValueError so plain callers can
treat them as bad input.
"""


class CalciottoError(ValueError):
    code = "calciotto_error"
    status = 400

    def __init__(self, message: str | None = None, player_id: int | str | None = None):
        self.player_id = player_id
        if message is None:
            message = self.code if player_id is None else f"{self.code}: {player_id}"
        super().__init__(message)


class NotFoundError(CalciottoError):
    code = "not_found"
    status = 404


class MatchNotFoundError(NotFoundError):
    code = "match_not_found"


class VariantNotFoundError(NotFoundError):
    code = "variant_not_found"


class PlayerNotFoundError(NotFoundError):
    code = "player_not_found"


class NoStartersError(CalciottoError):
    code = "no_starters"
    status = 409


class MissingRatingsError(CalciottoError):
    """A starter has no ratings row; generation never invents one."""

    code = "ratings_missing"
    status = 409


class StartersFullError(CalciottoError):
    code = "starters_full"
    status = 409


class NotAStarterError(CalciottoError):
    code = "not_a_starter"


class DuplicatePlayerError(CalciottoError):
    code = "duplicate_player"


class InvalidRatingsError(CalciottoError):
    code = "invalid_ratings"


class InvalidSportError(CalciottoError):
    code = "invalid_sport"


class MatchNotOpenError(CalciottoError):
    code = "match_not_open"
    status = 410


class SignupNotFoundError(NotFoundError):
    code = "signup_not_found"


class InvalidStatusError(CalciottoError):
    code = "invalid_status"


class IncompleteSplitError(CalciottoError):
    """A manual split leaves out a current starter."""

    code = "split_incomplete"
