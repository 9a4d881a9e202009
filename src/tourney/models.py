from datetime import datetime

from .errors import ValidationError

# Tournament formats
GROUPS = 'groups'
KNOCKOUT = 'knockout'
MIXED = 'mixed'
FORMATS = (GROUPS, KNOCKOUT, MIXED)
BRACKET_FORMATS = (KNOCKOUT, MIXED)

# Match statuses
SCHEDULED = 'scheduled'
IN_PROGRESS = 'in_progress'
COMPLETED = 'completed'
MATCH_STATUSES = (SCHEDULED, IN_PROGRESS, COMPLETED)

# Tournament statuses
UPCOMING = 'upcoming'
ACTIVE = 'active'
TOURNAMENT_STATUSES = (UPCOMING, ACTIVE, COMPLETED)

DEFAULT_TEAMS_PER_GROUP = 4

SPORTS = ('football', 'basketball', 'volleyball', 'handball',
          'truco', 'canastra', 'pingpong', 'swimming')

_OPTIONAL_MATCH_FIELDS = ('winner', 'group', 'round', 'position', 'next_match_id')


class Match:
    def __init__(self, id, team1='', team2='', score1=0, score2=0, status=SCHEDULED,
                 winner=None, group=None, round=None, position=None, next_match_id=None):
        self.id = id
        self.team1 = team1
        self.team2 = team2
        self.score1 = score1
        self.score2 = score2
        self.status = status
        self.winner = winner
        self.group = group
        self.round = round  # 1-indexed, bracket formats only
        self.position = position  # 0-indexed within the round
        self.next_match_id = next_match_id

    @property
    def is_bracket(self):
        return self.round is not None

    def copy(self):
        return Match.from_dict(self.to_dict())

    def to_dict(self):
        data = {
            'id': self.id,
            'team1': self.team1,
            'team2': self.team2,
            'score1': self.score1,
            'score2': self.score2,
            'status': self.status,
        }
        for field in _OPTIONAL_MATCH_FIELDS:
            value = getattr(self, field)
            if value is not None:
                data[field] = value
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            team1=data.get('team1') or '',
            team2=data.get('team2') or '',
            score1=data.get('score1', 0),
            score2=data.get('score2', 0),
            status=data.get('status', SCHEDULED),
            winner=data.get('winner'),
            group=data.get('group'),
            round=data.get('round'),
            position=data.get('position'),
            next_match_id=data.get('next_match_id'),
        )

    def __eq__(self, other):
        if not isinstance(other, Match):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Match(id={self.id}, team1={self.team1!r}, team2={self.team2!r}, "
                f"score={self.score1}-{self.score2}, status={self.status})")


class Tournament:
    def __init__(self, id, name, sport='football', format=GROUPS,
                 teams_per_group=DEFAULT_TEAMS_PER_GROUP, status=UPCOMING, winner=None,
                 teams=None, matches=None, date=None):
        self.id = id
        self.name = name
        self.sport = sport
        self.format = format
        self.teams_per_group = teams_per_group
        self.status = status
        self.winner = winner
        self.teams = list(teams or [])
        self.matches = list(matches or [])
        self.date = date or datetime.now().isoformat()

    @property
    def is_bracket(self):
        return self.format in BRACKET_FORMATS

    @property
    def is_scheduled(self):
        return bool(self.matches)

    def get_match(self, match_id):
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def add_team(self, name):
        """Add a participant to the roster. Returns the stored (trimmed) name."""
        if not isinstance(name, str) or not name.strip():
            raise ValidationError('Team name is required.')
        name = name.strip()
        if self.is_scheduled:
            raise ValidationError('Teams cannot be changed after matches are generated.')
        if name in self.teams:
            raise ValidationError(f'Team "{name}" already exists.')
        self.teams.append(name)
        return name

    def remove_team(self, name):
        if self.is_scheduled:
            raise ValidationError('Teams cannot be changed after matches are generated.')
        if name not in self.teams:
            raise ValidationError(f'Team "{name}" not found.')
        self.teams.remove(name)

    def to_dict(self):
        data = {
            'id': self.id,
            'name': self.name,
            'sport': self.sport,
            'format': self.format,
            'teams_per_group': self.teams_per_group,
            'status': self.status,
            'date': self.date,
            'teams': list(self.teams),
            'matches': [match.to_dict() for match in self.matches],
        }
        if self.winner is not None:
            data['winner'] = self.winner
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            name=data.get('name', data['id']),
            sport=data.get('sport', 'football'),
            format=data.get('format', GROUPS),
            teams_per_group=data.get('teams_per_group', DEFAULT_TEAMS_PER_GROUP),
            status=data.get('status', UPCOMING),
            winner=data.get('winner'),
            teams=list(data.get('teams') or []),
            matches=[Match.from_dict(m) for m in data.get('matches') or []],
            date=data.get('date'),
        )

    def __repr__(self):
        return (f"Tournament(id={self.id}, format={self.format}, status={self.status}, "
                f"teams={len(self.teams)}, matches={len(self.matches)})")
