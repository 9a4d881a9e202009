"""
Exceptions raised by the scheduling engine.
"""


class TournamentError(Exception):
    """Base class for tournament engine errors."""


class ValidationError(TournamentError, ValueError):
    """Input rejected before anything was built or changed."""


class MatchNotFoundError(TournamentError, LookupError):
    """A match id that is not part of the match set."""

    def __init__(self, match_id):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found")
