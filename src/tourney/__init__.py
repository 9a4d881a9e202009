"""Match-schedule generation and progression engine."""

from .errors import MatchNotFoundError, TournamentError, ValidationError
from .formats import generate_schedule, schedule_tournament
from .models import Match, Tournament
from .results import apply_result, record_result
from .elimination import find_champion

__all__ = [
    "Match",
    "Tournament",
    "TournamentError",
    "ValidationError",
    "MatchNotFoundError",
    "generate_schedule",
    "schedule_tournament",
    "apply_result",
    "record_result",
    "find_champion",
]
