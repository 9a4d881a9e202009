"""
Recording match results and advancing winners through the bracket.
"""
import logging
from typing import List, Optional, Tuple

from .elimination import get_final_match, winner_slot
from .errors import MatchNotFoundError, ValidationError
from .models import Match, COMPLETED, IN_PROGRESS

logger = logging.getLogger(__name__)


def validate_score(score):
    if isinstance(score, bool) or not isinstance(score, int) or score < 0:
        raise ValidationError('Scores must be non-negative integers.')


def determine_winner(match: Match, score1: int, score2: int) -> Optional[str]:
    """Return the winning team name, or None for a draw."""
    if score1 > score2:
        return match.team1
    elif score2 > score1:
        return match.team2
    return None


def apply_result(matches: List[Match], match_id: str, score1: int,
                 score2: int) -> Tuple[List[Match], Optional[str]]:
    """
    Apply a score to one match and advance its winner.

    The input list is left untouched; a list of copies is returned together
    with the champion when this result decides the bracket final.

    A draw leaves the match in progress without a winner and fills no
    successor slot. A winner is written into the successor's team1 slot when
    this match sits at an even position, team2 otherwise; a corrected result
    with a different winner overwrites that slot.
    """
    validate_score(score1)
    validate_score(score2)

    updated = [match.copy() for match in matches]
    by_id = {match.id: match for match in updated}

    match = by_id.get(match_id)
    if match is None:
        raise MatchNotFoundError(match_id)
    if not match.team1 or not match.team2:
        raise ValidationError(f'Both teams of {match_id} must be decided before scoring.')

    winner = determine_winner(match, score1, score2)
    match.score1 = score1
    match.score2 = score2
    match.winner = winner
    match.status = COMPLETED if winner else IN_PROGRESS

    if winner and match.next_match_id:
        successor = by_id.get(match.next_match_id)
        if successor is None:
            raise MatchNotFoundError(match.next_match_id)
        setattr(successor, winner_slot(match.position), winner)
        logger.debug(f"{winner} advances from {match.id} to {successor.id}")

    champion = None
    final_match = get_final_match(updated)
    if final_match is not None and final_match.id == match.id and match.status == COMPLETED:
        champion = match.winner

    return updated, champion


def record_result(tournament, match_id: str, score1: int, score2: int) -> Optional[str]:
    """Apply a result to a tournament, completing it when the final is decided."""
    tournament.matches, champion = apply_result(tournament.matches, match_id, score1, score2)
    if champion and tournament.is_bracket:
        tournament.status = COMPLETED
        tournament.winner = champion
    return champion
