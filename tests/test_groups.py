"""
Unit tests for group stage generation.
"""
import pytest
import random
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from tourney.errors import ValidationError
from tourney.formats import generate_schedule
from tourney.groups import group_label, assign_groups, calculate_num_groups, generate_group_matches


class TestGroupLabels:
    """Tests for group labelling."""

    def test_first_labels_are_letters(self):
        """Test A, B, C for the first groups."""
        assert [group_label(i) for i in range(3)] == ["A", "B", "C"]

    def test_label_26_is_z(self):
        """Test the 26th group is Z."""
        assert group_label(25) == "Z"

    def test_labels_widen_past_z(self):
        """Test labels keep going past 26 groups."""
        assert group_label(26) == "A1"
        assert group_label(27) == "B1"
        assert group_label(52) == "A2"

    def test_labels_unique(self):
        """Test 100 groups get 100 distinct labels."""
        labels = [group_label(i) for i in range(100)]
        assert len(set(labels)) == 100


class TestGroupAssignment:
    """Tests for splitting entrants into groups."""

    def test_num_groups_rounds_up(self):
        """Test partial groups count."""
        assert calculate_num_groups(6, 3) == 2
        assert calculate_num_groups(7, 3) == 3
        assert calculate_num_groups(4, 4) == 1

    def test_assign_consecutive_chunks(self):
        """Test entrants are split in order."""
        groups = assign_groups(["a", "b", "c", "d", "e"], 2)
        assert groups == {"A": ["a", "b"], "B": ["c", "d"], "C": ["e"]}


class TestGroupMatches:
    """Tests for round-robin generation within groups."""

    def test_three_team_group(self):
        """Test 3 teams produce 3 matches in nested index order."""
        matches = generate_group_matches({"A": ["X", "Y", "Z"]})
        assert [(m.team1, m.team2) for m in matches] == [("X", "Y"), ("X", "Z"), ("Y", "Z")]
        assert [m.id for m in matches] == ["match_groupA_0_1", "match_groupA_0_2", "match_groupA_1_2"]
        assert all(m.group == "A" for m in matches)

    @pytest.mark.parametrize("size", range(2, 11))
    def test_round_robin_count(self, size):
        """Test a group of k plays k*(k-1)/2 unique pairs."""
        teams = [f"T{i}" for i in range(size)]
        matches = generate_group_matches({"A": teams})
        pairs = {frozenset((m.team1, m.team2)) for m in matches}
        assert len(matches) == size * (size - 1) // 2
        assert len(pairs) == len(matches)
        assert all(m.team1 != m.team2 for m in matches)

    def test_group_matches_have_no_bracket_fields(self):
        """Test no round, position or successor on group matches."""
        for match in generate_group_matches({"A": ["X", "Y"]}):
            assert match.round is None
            assert match.position is None
            assert match.next_match_id is None

    def test_single_team_group_skipped(self, caplog):
        """Test a one-team group yields no matches and a warning."""
        matches = generate_group_matches({"A": ["X", "Y"], "B": ["Z"]})
        assert len(matches) == 1
        assert "Group B" in caplog.text


class TestGroupSchedule:
    """Tests for the groups format through generate_schedule."""

    def test_six_teams_groups_of_three(self, six_teams, rng):
        """Test 6 teams in groups of 3: 2 groups, 3 matches each."""
        matches = generate_schedule(six_teams, "groups", 3, rng)
        assert len(matches) == 6

        by_group = {}
        for match in matches:
            by_group.setdefault(match.group, []).append(match)
        assert sorted(by_group) == ["A", "B"]
        assert all(len(group_matches) == 3 for group_matches in by_group.values())

        members = {}
        for group, group_matches in by_group.items():
            members[group] = {t for m in group_matches for t in (m.team1, m.team2)}
        assert members["A"].isdisjoint(members["B"])
        assert members["A"] | members["B"] == set(six_teams)

    def test_no_cross_group_matches(self, rng):
        """Test every match stays within one group."""
        teams = [f"T{i}" for i in range(10)]
        matches = generate_schedule(teams, "groups", 4, rng)
        team_group = {}
        for match in matches:
            for team in (match.team1, match.team2):
                assert team_group.setdefault(team, match.group) == match.group

    def test_default_group_size(self, rng):
        """Test groups of 4 when no size is given."""
        matches = generate_schedule([f"T{i}" for i in range(8)], "groups", rng=rng)
        assert len(matches) == 12
        assert {m.group for m in matches} == {"A", "B"}

    def test_match_ids_unique(self, rng):
        """Test ids are unique across groups."""
        matches = generate_schedule([f"T{i}" for i in range(12)], "groups", 3, rng)
        assert len({m.id for m in matches}) == len(matches)


class TestScheduleValidation:
    """Tests for inputs rejected before generation."""

    def test_fewer_than_two_participants(self):
        """Test at least two participants are required."""
        with pytest.raises(ValidationError):
            generate_schedule(["Solo"], "knockout")
        with pytest.raises(ValidationError):
            generate_schedule([], "groups", 2)

    def test_group_size_too_small(self):
        """Test group size must be at least 2."""
        with pytest.raises(ValidationError):
            generate_schedule(["X", "Y", "Z"], "groups", 1)

    def test_group_size_must_be_integer(self):
        """Test a non-integer group size is rejected."""
        with pytest.raises(ValidationError):
            generate_schedule(["X", "Y", "Z"], "groups", "3")

    def test_unknown_format(self):
        """Test unrecognized formats are rejected."""
        with pytest.raises(ValidationError, match="Unknown format"):
            generate_schedule(["X", "Y"], "swiss")

    def test_duplicate_names(self):
        """Test duplicate participant names are rejected."""
        with pytest.raises(ValidationError):
            generate_schedule(["X", "X"], "knockout")

    def test_blank_names(self):
        """Test blank participant names are rejected."""
        with pytest.raises(ValidationError):
            generate_schedule(["X", " "], "knockout")

    def test_validation_error_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            generate_schedule(["X"], "knockout", rng=random.Random(0))
