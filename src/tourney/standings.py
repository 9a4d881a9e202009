from typing import Dict, List

from .models import Match, COMPLETED


def calculate_group_standings(matches: List[Match]) -> Dict[str, List[Dict]]:
    """
    Calculate standings for each group from completed group matches.

    Returns: {group: [{'team': name, 'wins': n, 'losses': n, 'matches_played': n,
                       'points_for': n, 'points_against': n, 'point_diff': n}, ...]}

    Ranking: wins -> point differential -> points scored -> alphabetical.
    Only completed matches count; a drawn match is still in progress.
    """
    groups = {}
    for match in matches:
        if match.group is None:
            continue
        team_stats = groups.setdefault(match.group, {})
        for team in (match.team1, match.team2):
            if team not in team_stats:
                team_stats[team] = {
                    'team': team,
                    'wins': 0,
                    'losses': 0,
                    'matches_played': 0,
                    'points_for': 0,
                    'points_against': 0,
                }

        if match.status != COMPLETED:
            continue

        team1_stats = team_stats[match.team1]
        team2_stats = team_stats[match.team2]
        team1_stats['points_for'] += match.score1
        team1_stats['points_against'] += match.score2
        team2_stats['points_for'] += match.score2
        team2_stats['points_against'] += match.score1
        team1_stats['matches_played'] += 1
        team2_stats['matches_played'] += 1

        if match.winner == match.team1:
            team1_stats['wins'] += 1
            team2_stats['losses'] += 1
        elif match.winner == match.team2:
            team2_stats['wins'] += 1
            team1_stats['losses'] += 1

    standings = {}
    for group in sorted(groups):
        for stats in groups[group].values():
            stats['point_diff'] = stats['points_for'] - stats['points_against']
        standings[group] = sorted(
            groups[group].values(),
            key=lambda x: (-x['wins'], -x['point_diff'], -x['points_for'], x['team'])
        )
    return standings
