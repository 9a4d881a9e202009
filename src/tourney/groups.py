"""
Group stage (round-robin) generation.
"""
import logging
import math
import string
from itertools import combinations
from typing import List, Dict

from .models import Match

logger = logging.getLogger(__name__)


def group_label(index: int) -> str:
    """Label for the ``index``-th group: A..Z, then A1..Z1, A2.. and so on."""
    letter = string.ascii_uppercase[index % 26]
    cycle = index // 26
    return letter if cycle == 0 else f"{letter}{cycle}"


def calculate_num_groups(num_teams: int, group_size: int) -> int:
    return math.ceil(num_teams / group_size)


def assign_groups(entrants: List[str], group_size: int) -> Dict[str, List[str]]:
    """Split an ordered entrant list into consecutive groups of up to ``group_size``."""
    groups = {}
    for i in range(calculate_num_groups(len(entrants), group_size)):
        start = i * group_size
        groups[group_label(i)] = entrants[start:start + group_size]
    return groups


def generate_group_matches(groups: Dict[str, List[str]]) -> List[Match]:
    """Every unordered pair within each group plays once."""
    matches = []
    for label, group_teams in groups.items():
        if len(group_teams) < 2:
            logger.warning(f"Group {label} has fewer than 2 teams ({group_teams}). Skipping match generation.")
            continue
        for (i, team1), (j, team2) in combinations(enumerate(group_teams), 2):
            matches.append(Match(
                id=f"match_group{label}_{i}_{j}",
                team1=team1,
                team2=team2,
                group=label,
            ))
    return matches
