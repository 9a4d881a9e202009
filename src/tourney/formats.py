import logging
import random

from .elimination import generate_bracket_matches
from .errors import ValidationError
from .groups import assign_groups, generate_group_matches
from .models import (
    ACTIVE, BRACKET_FORMATS, DEFAULT_TEAMS_PER_GROUP, FORMATS, GROUPS, SPORTS,
)

logger = logging.getLogger(__name__)


def validate_participants(participants):
    if len(participants) < 2:
        raise ValidationError('Add at least 2 teams to generate matches.')
    seen = set()
    for name in participants:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError('Team names must be non-empty strings.')
        if name in seen:
            raise ValidationError(f'Team "{name}" appears more than once.')
        seen.add(name)


def validate_group_size(group_size):
    if isinstance(group_size, bool) or not isinstance(group_size, int) or group_size < 2:
        raise ValidationError('Each group needs at least 2 teams.')


def validate_tournament_settings(name, sport, format, teams_per_group):
    """Check the settings a new tournament is created with."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Tournament name is required.')
    if sport not in SPORTS:
        raise ValidationError(f'Unknown sport "{sport}".')
    if format not in FORMATS:
        raise ValidationError(f'Unknown format "{format}".')
    validate_group_size(teams_per_group)


class TournamentFormat:
    def __init__(self, teams, rng=None):
        self.teams = list(teams)
        self.rng = rng if rng is not None else random

    def shuffled(self):
        teams = list(self.teams)
        self.rng.shuffle(teams)
        return teams

    def groups(self, group_size=DEFAULT_TEAMS_PER_GROUP):
        validate_group_size(group_size)
        groups = assign_groups(self.shuffled(), group_size)
        logger.debug(f"Assigned {len(self.teams)} teams to {len(groups)} groups")
        return generate_group_matches(groups)

    def knockout(self):
        return generate_bracket_matches(self.shuffled())

    def generate(self, format, group_size=None):
        if format not in FORMATS:
            raise ValidationError(f'Unknown format "{format}".')
        validate_participants(self.teams)
        if format in BRACKET_FORMATS:
            # Mixed schedules as a bracket; running groups first is up to the caller
            return self.knockout()
        return self.groups(DEFAULT_TEAMS_PER_GROUP if group_size is None else group_size)


def generate_schedule(participants, format, group_size=None, rng=None):
    """Generate the full match set for ``participants`` in the given format."""
    return TournamentFormat(participants, rng).generate(format, group_size)


def schedule_tournament(tournament, rng=None):
    """Generate matches from the tournament roster and mark it active."""
    if tournament.is_scheduled:
        raise ValidationError('Matches have already been generated.')
    group_size = tournament.teams_per_group if tournament.format == GROUPS else None
    tournament.matches = generate_schedule(tournament.teams, tournament.format, group_size, rng)
    tournament.status = ACTIVE
    return tournament.matches
