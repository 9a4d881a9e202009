"""
Flask web application for the Tournament Organizer.
"""
import os
import re
import logging
import yaml
from filelock import FileLock
from flask import Flask, request, jsonify
from tourney.errors import ValidationError, MatchNotFoundError
from tourney.models import Tournament, ACTIVE, COMPLETED, UPCOMING, GROUPS
from tourney.formats import schedule_tournament, validate_tournament_settings
from tourney.results import record_result
from tourney.elimination import get_bracket_display
from tourney.standings import calculate_group_standings

app = Flask(__name__)
app.logger.setLevel(logging.INFO)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get('TOURNAMENT_DATA_DIR', os.path.join(BASE_DIR, 'data'))

TOURNAMENT_FILTERS = ('all', 'active', 'completed')


def _file_path(filename: str) -> str:
    """Return full path to a file in the data directory."""
    return os.path.join(DATA_DIR, filename)


def _data_lock() -> FileLock:
    os.makedirs(DATA_DIR, exist_ok=True)
    return FileLock(_file_path('.lock'), timeout=10)


def get_default_settings():
    """Return default settings for new tournaments."""
    return {
        'sport': 'football',
        'format': GROUPS,
        'teams_per_group': 4,
    }


def load_tournaments() -> list:
    """Load all tournaments from YAML."""
    path = _file_path('tournaments.yaml')
    if not os.path.exists(path):
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        app.logger.warning(f'Failed to parse {path}: {e}')
        return []
    if not data:
        return []
    return [Tournament.from_dict(t) for t in data.get('tournaments', [])]


def save_tournaments(tournaments: list):
    """Save all tournaments to YAML."""
    os.makedirs(DATA_DIR, exist_ok=True)
    with open(_file_path('tournaments.yaml'), 'w', encoding='utf-8') as f:
        yaml.dump({'tournaments': [t.to_dict() for t in tournaments]}, f,
                  default_flow_style=False, allow_unicode=True, sort_keys=False)


def _slugify(name: str) -> str:
    """Convert tournament name to a URL-safe id."""
    slug = name.lower().strip()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'[\s-]+', '-', slug)
    slug = slug.strip('-')
    return slug or 'tournament'


def _find_tournament(tournaments: list, tournament_id: str):
    for t in tournaments:
        if t.id == tournament_id:
            return t
    return None


def filter_tournaments(tournaments: list, status_filter: str) -> list:
    """Filter for the listing page: 'active' also covers upcoming tournaments."""
    if status_filter == 'active':
        return [t for t in tournaments if t.status in (ACTIVE, UPCOMING)]
    if status_filter == 'completed':
        return [t for t in tournaments if t.status == COMPLETED]
    return list(tournaments)


def _not_found():
    return jsonify({'error': 'Tournament not found'}), 404


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({'error': str(e)}), 400


@app.errorhandler(MatchNotFoundError)
def handle_match_not_found(e):
    return jsonify({'error': str(e)}), 404


@app.route('/api/tournaments')
def api_list_tournaments():
    """List tournaments, optionally filtered by status."""
    status_filter = request.args.get('filter', 'all')
    if status_filter not in TOURNAMENT_FILTERS:
        return jsonify({'error': f'Unknown filter "{status_filter}"'}), 400
    tournaments = filter_tournaments(load_tournaments(), status_filter)
    return jsonify({'tournaments': [t.to_dict() for t in tournaments]})


@app.route('/api/tournaments/create', methods=['POST'])
def api_create_tournament():
    """Create a new tournament."""
    data = {**get_default_settings(), **(request.get_json(silent=True) or {})}
    name = data.get('name')
    if not isinstance(name, str):
        return jsonify({'error': 'Tournament name is required.'}), 400
    name = name.strip()
    validate_tournament_settings(name, data['sport'], data['format'], data['teams_per_group'])

    with _data_lock():
        tournaments = load_tournaments()
        slug = _slugify(name)
        if _find_tournament(tournaments, slug):
            return jsonify({'error': f'A tournament with a similar name already exists ("{slug}").'}), 400

        tournament = Tournament(
            id=slug,
            name=name,
            sport=data['sport'],
            format=data['format'],
            teams_per_group=data['teams_per_group'],
        )
        tournaments.append(tournament)
        save_tournaments(tournaments)

    app.logger.info(f'Tournament "{name}" created ({tournament.format})')
    return jsonify({'success': True, 'tournament': tournament.to_dict()}), 201


@app.route('/api/tournaments/<tournament_id>')
def api_get_tournament(tournament_id):
    tournament = _find_tournament(load_tournaments(), tournament_id)
    if tournament is None:
        return _not_found()
    return jsonify({'tournament': tournament.to_dict()})


@app.route('/api/tournaments/delete', methods=['POST'])
def api_delete_tournament():
    """Delete a tournament."""
    data = request.get_json(silent=True) or {}
    tournament_id = data.get('id')
    if not tournament_id:
        return jsonify({'error': 'Missing tournament id'}), 400

    with _data_lock():
        tournaments = load_tournaments()
        if _find_tournament(tournaments, tournament_id) is None:
            return _not_found()
        save_tournaments([t for t in tournaments if t.id != tournament_id])

    return jsonify({'success': True})


@app.route('/api/tournaments/<tournament_id>/teams', methods=['POST'])
def api_add_team(tournament_id):
    """Add a team to the roster of a tournament that has not started."""
    data = request.get_json(silent=True) or {}
    with _data_lock():
        tournaments = load_tournaments()
        tournament = _find_tournament(tournaments, tournament_id)
        if tournament is None:
            return _not_found()
        name = tournament.add_team(data.get('name'))
        save_tournaments(tournaments)

    return jsonify({'success': True, 'team': name, 'teams': tournament.teams})


@app.route('/api/tournaments/<tournament_id>/teams/remove', methods=['POST'])
def api_remove_team(tournament_id):
    data = request.get_json(silent=True) or {}
    with _data_lock():
        tournaments = load_tournaments()
        tournament = _find_tournament(tournaments, tournament_id)
        if tournament is None:
            return _not_found()
        tournament.remove_team(data.get('name'))
        save_tournaments(tournaments)

    return jsonify({'success': True, 'teams': tournament.teams})


@app.route('/api/tournaments/<tournament_id>/generate', methods=['POST'])
def api_generate_matches(tournament_id):
    """Generate the full match schedule and start the tournament."""
    with _data_lock():
        tournaments = load_tournaments()
        tournament = _find_tournament(tournaments, tournament_id)
        if tournament is None:
            return _not_found()
        matches = schedule_tournament(tournament)
        save_tournaments(tournaments)

    app.logger.info(f'Generated {len(matches)} matches for "{tournament.name}"')
    return jsonify({
        'success': True,
        'status': tournament.status,
        'matches': [m.to_dict() for m in matches],
    })


@app.route('/api/tournaments/<tournament_id>/matches/<match_id>')
def api_get_match(tournament_id, match_id):
    tournament = _find_tournament(load_tournaments(), tournament_id)
    if tournament is None:
        return _not_found()
    match = tournament.get_match(match_id)
    if match is None:
        raise MatchNotFoundError(match_id)
    return jsonify({'match': match.to_dict()})


@app.route('/api/tournaments/<tournament_id>/results', methods=['POST'])
def api_save_result(tournament_id):
    """API endpoint to save a match score."""
    data = request.get_json(silent=True) or {}
    match_id = data.get('match_id')
    if not match_id:
        return jsonify({'error': 'Missing match_id'}), 400
    if 'score1' not in data or 'score2' not in data:
        return jsonify({'error': 'Both scores must be provided'}), 400

    with _data_lock():
        tournaments = load_tournaments()
        tournament = _find_tournament(tournaments, tournament_id)
        if tournament is None:
            return _not_found()

        match = tournament.get_match(match_id)
        if match is None:
            raise MatchNotFoundError(match_id)
        if match.status == COMPLETED:
            return jsonify({'error': 'Match is already completed'}), 400
        if not match.team1 or not match.team2:
            return jsonify({'error': 'Both teams must be decided before scoring'}), 400

        champion = record_result(tournament, match_id, data['score1'], data['score2'])
        save_tournaments(tournaments)

    if champion:
        app.logger.info(f'Tournament "{tournament.name}" won by {champion}')
    return jsonify({
        'success': True,
        'match': tournament.get_match(match_id).to_dict(),
        'champion': champion,
        'status': tournament.status,
    })


@app.route('/api/tournaments/<tournament_id>/bracket')
def api_bracket(tournament_id):
    """Bracket rounds for display."""
    tournament = _find_tournament(load_tournaments(), tournament_id)
    if tournament is None:
        return _not_found()
    return jsonify(get_bracket_display(tournament.matches))


@app.route('/api/tournaments/<tournament_id>/standings')
def api_standings(tournament_id):
    """Group standings; empty for bracket tournaments."""
    tournament = _find_tournament(load_tournaments(), tournament_id)
    if tournament is None:
        return _not_found()
    return jsonify({'standings': calculate_group_standings(tournament.matches)})


if __name__ == '__main__':
    app.run(debug=True, port=5000)
