"""
Single elimination bracket generation and display.
"""
import math
from typing import List, Dict, Optional

from .models import Match, COMPLETED


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of teams."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def calculate_total_rounds(num_teams: int) -> int:
    bracket_size = calculate_bracket_size(num_teams)
    if bracket_size < 2:
        return 0
    return int(math.log2(bracket_size))


def bracket_match_id(round_number: int, position: int) -> str:
    return f"match_r{round_number}_{position}"


def winner_slot(position: int) -> str:
    """Slot of the successor match that receives the winner of ``position``."""
    return 'team1' if position % 2 == 0 else 'team2'


def generate_bracket_matches(entrants: List[str]) -> List[Match]:
    """
    Build a complete single elimination bracket from an ordered entrant list.

    The first ``n - byes`` entrants are paired in order for round 1. The
    remaining entrants get a bye: no match is created for them, they are
    placed straight into the round 2 slots that round 1 does not feed.

    Round 2 slot ``s`` is match ``s // 2`` (team1 when ``s`` is even). Round 1
    match ``p`` feeds slot ``p``, so byes fill slots ``first_round_count``
    onwards. Every match in round ``r`` is linked to round ``r + 1`` at
    ``position // 2``.
    """
    num_teams = len(entrants)
    if num_teams < 2:
        return []

    num_byes = calculate_byes(num_teams)
    total_rounds = calculate_total_rounds(num_teams)
    first_round_count = (num_teams - num_byes) // 2

    rounds: Dict[int, List[Match]] = {1: []}
    for position in range(first_round_count):
        rounds[1].append(Match(
            id=bracket_match_id(1, position),
            team1=entrants[position * 2],
            team2=entrants[position * 2 + 1],
            round=1,
            position=position,
        ))

    for round_number in range(2, total_rounds + 1):
        matches_in_round = 2 ** (total_rounds - round_number)
        rounds[round_number] = [
            Match(id=bracket_match_id(round_number, position), round=round_number, position=position)
            for position in range(matches_in_round)
        ]

    bye_teams = entrants[num_teams - num_byes:]
    for offset, team in enumerate(bye_teams):
        slot = first_round_count + offset
        setattr(rounds[2][slot // 2], winner_slot(slot), team)

    for round_number in range(1, total_rounds):
        for match in rounds[round_number]:
            match.next_match_id = bracket_match_id(round_number + 1, match.position // 2)

    matches = []
    for round_number in range(1, total_rounds + 1):
        matches.extend(rounds[round_number])
    return matches


def get_final_match(matches: List[Match]) -> Optional[Match]:
    """Return the bracket match with the highest round, if any."""
    bracket_matches = [m for m in matches if m.round is not None]
    if not bracket_matches:
        return None
    return max(bracket_matches, key=lambda m: m.round)


def find_champion(matches: List[Match]) -> Optional[str]:
    """Winner of the completed final, or None."""
    final_match = get_final_match(matches)
    if final_match is None or final_match.status != COMPLETED:
        return None
    return final_match.winner


def get_bracket_display(matches: List[Match]) -> Dict:
    """
    Get bracket data formatted for UI display.

    Returns dict with:
    - 'rounds': list of {'round', 'name', 'matches'} ordered from round 1
    - 'total_rounds': number of rounds
    - 'byes': entrants that skipped round 1
    - 'champion': winner of the final, if decided
    """
    bracket_matches = [m for m in matches if m.round is not None]
    if not bracket_matches:
        return {'rounds': [], 'total_rounds': 0, 'byes': 0, 'champion': None}

    total_rounds = max(m.round for m in bracket_matches)
    rounds = []
    for round_number in range(1, total_rounds + 1):
        round_matches = sorted(
            (m for m in bracket_matches if m.round == round_number),
            key=lambda m: m.position,
        )
        rounds.append({
            'round': round_number,
            'name': get_round_name(2 ** (total_rounds - round_number + 1)),
            'matches': [m.to_dict() for m in round_matches],
        })

    # Round 1 plays every entrant except the byes; n - 1 matches overall
    num_teams = len(bracket_matches) + 1
    first_round_count = len(rounds[0]['matches'])

    return {
        'rounds': rounds,
        'total_rounds': total_rounds,
        'byes': num_teams - first_round_count * 2,
        'champion': find_champion(bracket_matches),
    }
