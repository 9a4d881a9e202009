import argparse
import random
import sys
import yaml
from tourney.errors import ValidationError
from tourney.formats import generate_schedule
from tourney.models import FORMATS, GROUPS, DEFAULT_TEAMS_PER_GROUP


def load_participants(file_path):
    """Load a YAML list of participant names."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if not data:
        return []
    if not isinstance(data, list):
        raise ValidationError(f'{file_path} must contain a list of team names.')
    return [str(name).strip() for name in data]


def format_schedule(matches):
    """Render matches as text, one section per group or round."""
    sections = {}
    for match in matches:
        heading = f"Group {match.group}" if match.group else f"Round {match.round}"
        sections.setdefault(heading, []).append(match)

    lines = []
    for heading, section_matches in sections.items():
        if lines:
            lines.append('')
        lines.append(f"# {heading}")
        for match in section_matches:
            team1 = match.team1 or 'TBD'
            team2 = match.team2 or 'TBD'
            lines.append(f"{match.id}: {team1} vs {team2}")
    return '\n'.join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Print a match schedule for a list of teams.')
    parser.add_argument('teams_file', help='YAML file with a list of team names')
    parser.add_argument('--format', choices=FORMATS, default=GROUPS)
    parser.add_argument('--group-size', type=int, default=DEFAULT_TEAMS_PER_GROUP)
    parser.add_argument('--seed', type=int, help='Seed for a reproducible draw')
    args = parser.parse_args(argv)

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        participants = load_participants(args.teams_file)
        matches = generate_schedule(participants, args.format, args.group_size, rng)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_schedule(matches))
    return 0


if __name__ == '__main__':
    sys.exit(main())
