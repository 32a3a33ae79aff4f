"""Unit tests for field path resolution.

Tests cover:
- Reading bare and nested field paths
- Writes returning new snapshots without touching the input
- Sibling skills and aliasing on nested writes
- Unknown field paths
"""

import pytest

from jobform.errors import FormContractError, InvalidFieldValueError, UnknownFieldPathError
from jobform.paths import FieldPathResolver
from jobform.schema import initial_values


class TestGet:
    """Test reading values by field path."""

    def test_get_bare_field(self):
        """Should return the value of a top-level field."""
        values = initial_values()
        values["email"] = "ada@example.com"
        assert FieldPathResolver().get(values, "email") == "ada@example.com"

    def test_get_skill(self):
        """Should return the boolean of a single skill."""
        values = initial_values()
        values["additionalSkills"]["CSS"] = True
        resolver = FieldPathResolver()
        assert resolver.get(values, "additionalSkills.CSS") is True
        assert resolver.get(values, "additionalSkills.Python") is False

    def test_get_skills_group_returns_copy(self):
        """Should return a copy of the skills mapping for a bare group read."""
        values = initial_values()
        skills = FieldPathResolver().get(values, "additionalSkills")
        skills["CSS"] = True
        assert values["additionalSkills"]["CSS"] is False


class TestSet:
    """Test writing values by field path."""

    def test_set_bare_field_returns_new_snapshot(self):
        """Should return a new snapshot and leave the input untouched."""
        before = initial_values()
        after = FieldPathResolver().set(before, "fullName", "Ada")
        assert after["fullName"] == "Ada"
        assert before["fullName"] == ""
        assert after is not before

    def test_set_skill_round_trip(self):
        """Should read back a written skill and leave siblings unchanged."""
        resolver = FieldPathResolver()
        before = initial_values()
        before["additionalSkills"]["JavaScript"] = True
        javascript_before = resolver.get(before, "additionalSkills.JavaScript")

        after = resolver.set(before, "additionalSkills.CSS", True)

        assert resolver.get(after, "additionalSkills.CSS") is True
        assert resolver.get(after, "additionalSkills.JavaScript") == javascript_before
        assert resolver.get(after, "additionalSkills.Python") is False

    def test_set_skill_replaces_group_mapping(self):
        """Should not share the skills mapping between old and new snapshots."""
        before = initial_values()
        after = FieldPathResolver().set(before, "additionalSkills.Python", True)
        assert after["additionalSkills"] is not before["additionalSkills"]
        assert before["additionalSkills"]["Python"] is False

    def test_set_skill_keeps_key_set(self):
        """Should keep exactly the fixed skill names as keys."""
        after = FieldPathResolver().set(initial_values(), "additionalSkills.CSS", True)
        assert set(after["additionalSkills"]) == {"JavaScript", "CSS", "Python"}

    @pytest.mark.parametrize("value", ["false", "", 0, 1, None])
    def test_set_skill_requires_bool(self, value):
        """Should reject skill values that are not bools and leave the input untouched."""
        before = initial_values()
        with pytest.raises(InvalidFieldValueError) as exc_info:
            FieldPathResolver().set(before, "additionalSkills.CSS", value)
        assert exc_info.value.value == value
        assert isinstance(exc_info.value, FormContractError)
        assert before["additionalSkills"]["CSS"] is False

    def test_custom_skill_set(self):
        """Should resolve skills from a custom skill set."""
        resolver = FieldPathResolver(skills=["Go", "Rust"])
        after = resolver.set(initial_values(["Go", "Rust"]), "additionalSkills.Rust", True)
        assert after["additionalSkills"] == {"Go": False, "Rust": True}


class TestUnknownFieldPath:
    """Test that unknown paths are rejected."""

    @pytest.mark.parametrize("path", [
        "nickname",
        "additionalSkills.Haskell",
        "additionalSkills.CSS.level",
        "fullName.first",
        "",
    ])
    def test_unknown_paths_raise(self, path):
        """Should raise UnknownFieldPathError for paths outside the form."""
        resolver = FieldPathResolver()
        with pytest.raises(UnknownFieldPathError) as exc_info:
            resolver.set(initial_values(), path, "x")
        assert exc_info.value.path == path

        with pytest.raises(UnknownFieldPathError):
            resolver.get(initial_values(), path)

    def test_bare_skills_group_write_raises(self):
        """Should refuse to replace the whole skills group."""
        with pytest.raises(UnknownFieldPathError) as exc_info:
            FieldPathResolver().set(initial_values(), "additionalSkills", {"CSS": True})
        assert "additionalSkills.<name>" in str(exc_info.value)

    def test_unknown_skill_message_lists_known_skills(self):
        """Should name the known skills in the error message."""
        with pytest.raises(UnknownFieldPathError) as exc_info:
            FieldPathResolver().get(initial_values(), "additionalSkills.Haskell")
        assert "JavaScript, CSS, Python" in str(exc_info.value)

    def test_non_string_path_raises(self):
        """Should reject a path that is not a string."""
        with pytest.raises(UnknownFieldPathError):
            FieldPathResolver().get(initial_values(), 42)

    def test_is_contract_error(self):
        """Should be catchable as a FormContractError and a ValueError."""
        with pytest.raises(FormContractError):
            FieldPathResolver().get(initial_values(), "nickname")
        with pytest.raises(ValueError):
            FieldPathResolver().get(initial_values(), "nickname")
