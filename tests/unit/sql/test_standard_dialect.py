"""
Unit tests for placeholder rendering and the standard dialect.
"""

import pytest

from upsert_builder.sql.core.parameters import build_placeholders, render_values_tuple
from upsert_builder.sql.dialects.standard import StandardDialect


class TestPlaceholders:
    """Tests for placeholder helpers."""

    def test_build_placeholders_default(self):
        """The generic marker is a question mark."""
        assert build_placeholders(3) == ["?", "?", "?"]

    def test_build_placeholders_custom(self):
        """Other markers are repeated verbatim."""
        assert build_placeholders(2, "%s") == ["%s", "%s"]

    def test_render_values_tuple(self):
        """A VALUES group is comma-space separated and parenthesized."""
        assert render_values_tuple(3) == "(?, ?, ?)"

    def test_render_empty_tuple(self):
        """Zero columns render an empty group."""
        assert render_values_tuple(0) == "()"


class TestStandardDialect:
    """Tests for StandardDialect statement rendering."""

    @pytest.fixture
    def dialect(self):
        return StandardDialect()

    def test_dialect_name(self, dialect):
        """Dialect should have correct name."""
        assert dialect.name == "standard"

    def test_build_insert_single_row(self, dialect):
        """Identifiers are emitted unquoted."""
        sql = dialect.build_insert("person", ["id", "name"], ["(?, ?)"])
        assert sql == "INSERT INTO person (id, name) VALUES (?, ?)"

    def test_build_insert_multiple_rows(self, dialect):
        """Row groups are joined with comma-space."""
        sql = dialect.build_insert("person", ["id", "name"], ["(?, ?)", "(?, ?)"])
        assert sql == "INSERT INTO person (id, name) VALUES (?, ?), (?, ?)"

    def test_on_conflict_do_update(self, dialect):
        """Conflict clause sits on its own line with excluded assignments."""
        sql = dialect.build_insert_on_conflict_do_update(
            table="person",
            columns=["id", "name", "age"],
            rows=["(?, ?, ?)"],
            conflict_columns=["id"],
            update_columns=["name", "age"],
        )

        assert sql == (
            "INSERT INTO person (id, name, age) VALUES (?, ?, ?)\n"
            "ON CONFLICT (id) DO UPDATE SET name = excluded.name, age = excluded.age"
        )

    def test_composite_conflict_columns(self, dialect):
        """Conflict columns are comma-space separated."""
        sql = dialect.build_insert_on_conflict_do_update(
            "enrollment",
            ["course_id", "grade", "student_id"],
            ["(?, ?, ?)"],
            ["course_id", "student_id"],
            ["grade"],
        )

        assert sql.endswith("ON CONFLICT (course_id, student_id) DO UPDATE SET grade = excluded.grade")

    def test_empty_update_columns(self, dialect):
        """No update columns leaves a bare DO UPDATE SET."""
        sql = dialect.build_insert_on_conflict_do_update("tag", ["id"], ["(?)"], ["id"], [])

        assert sql == "INSERT INTO tag (id) VALUES (?)\nON CONFLICT (id) DO UPDATE SET"

    def test_exactly_one_newline(self, dialect):
        """The statement spans exactly two lines."""
        sql = dialect.build_insert_on_conflict_do_update(
            "person", ["id", "name"], ["(?, ?)", "(?, ?)"], ["id"], ["name"]
        )
        assert sql.count("\n") == 1
