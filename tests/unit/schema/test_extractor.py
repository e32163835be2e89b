"""
Unit tests for field metadata extraction.
"""

from dataclasses import dataclass, field

import pytest

from upsert_builder.exceptions import BuilderConfigurationError
from upsert_builder.schema.core import ColumnDescriptor
from upsert_builder.schema.extractor import derive_metadata, parse_annotation


class TestParseAnnotation:
    """Tests for parse_annotation function."""

    def test_primary_column(self):
        """A trailing primary marker flags the column."""
        assert parse_annotation("id,primary") == ("id", True)

    def test_plain_column(self):
        """An annotation without options is a plain column."""
        assert parse_annotation("name") == ("name", False)

    def test_empty_annotation(self):
        """Empty annotations propagate as empty column names."""
        assert parse_annotation("") == ("", False)

    def test_name_stops_at_first_comma(self):
        """Only the part before the first comma is the column name."""
        assert parse_annotation("name,omitempty") == ("name", False)

    def test_token_match_tolerates_spaces(self):
        """Options are compared after stripping whitespace."""
        assert parse_annotation("id, primary", marker_match="token") == ("id", True)

    def test_token_match_ignores_marker_inside_name(self):
        """Token matching does not trip on a column named like the marker."""
        result = parse_annotation("is_primary_admin", marker_match="token")
        assert result == ("is_primary_admin", False)

    def test_marker_inside_name_flags_key(self):
        """By default any annotation containing the marker is a key."""
        assert parse_annotation("is_primary_admin") == ("is_primary_admin", True)

    def test_custom_marker(self):
        """The marker token is configurable."""
        assert parse_annotation("id,pk", primary_marker="pk") == ("id", True)
        assert parse_annotation("id,primary", primary_marker="pk") == ("id", False)

    def test_unknown_match_mode(self):
        """Unknown match modes are rejected."""
        with pytest.raises(BuilderConfigurationError):
            parse_annotation("id,primary", marker_match="regex")


class TestDeriveMetadata:
    """Tests for derive_metadata function."""

    def test_dataclass_type(self, person_cls):
        """Dataclass annotations produce ordered columns and key partitions."""
        metadata = derive_metadata(person_cls)

        assert metadata.table_name == "person"
        assert metadata.columns == ("id", "name")
        assert metadata.primary_key_columns == ("id",)
        assert metadata.primary_key_index == (0,)
        assert metadata.non_primary_key_columns == ("name",)
        assert metadata.fields == ("id", "name")

    def test_dataclass_instance_uses_its_type(self, person_cls):
        """A sample instance is only used for its shape."""
        assert derive_metadata(person_cls(id="x", name="y")) == derive_metadata(person_cls)

    def test_pydantic_model_matches_dataclass(self, person_cls, person_model_cls):
        """Pydantic json_schema_extra annotations derive the same columns."""
        from_dataclass = derive_metadata(person_cls)
        from_pydantic = derive_metadata(person_model_cls, table_name="person")

        assert from_pydantic == from_dataclass

    def test_pydantic_default_table_name(self, person_model_cls):
        """Table name defaults to the lower-cased class name."""
        assert derive_metadata(person_model_cls).table_name == "personmodel"

    def test_composite_key_preserves_declaration_order(self, enrollment_cls):
        """Key and non-key partitions keep declaration order."""
        metadata = derive_metadata(enrollment_cls)

        assert metadata.columns == ("course_id", "grade", "student_id")
        assert metadata.primary_key_columns == ("course_id", "student_id")
        assert metadata.primary_key_index == (0, 2)
        assert metadata.non_primary_key_columns == ("grade",)
        assert metadata.fields == ("course", "grade", "student")

    def test_column_name_comes_from_annotation(self, enrollment_cls):
        """Columns use the annotated name, not the attribute name."""
        metadata = derive_metadata(enrollment_cls)
        assert "course" not in metadata.columns

    def test_missing_annotation_yields_empty_name(self):
        """Fields without annotation become empty-string columns."""

        @dataclass
        class Loose:
            id: str = field(metadata={"db": "id,primary"})
            note: str = ""

        metadata = derive_metadata(Loose)
        assert metadata.columns == ("id", "")
        assert metadata.non_primary_key_columns == ("",)

    def test_custom_tag_key(self):
        """The metadata key holding annotations is configurable."""

        @dataclass
        class Tagged:
            id: str = field(metadata={"column": "tag_id,primary"})

        metadata = derive_metadata(Tagged, tag_key="column")
        assert metadata.columns == ("tag_id",)
        assert metadata.primary_key_index == (0,)

    def test_token_mode_changes_partition(self):
        """Token matching keeps a column named like the marker out of the key."""

        @dataclass
        class Account:
            id: str = field(metadata={"db": "id,primary"})
            admin: bool = field(metadata={"db": "is_primary_admin"})

        contained = derive_metadata(Account)
        assert contained.primary_key_columns == ("id", "is_primary_admin")
        assert contained.non_primary_key_columns == ()

        token = derive_metadata(Account, marker_match="token")
        assert token.primary_key_columns == ("id",)
        assert token.non_primary_key_columns == ("is_primary_admin",)

    def test_explicit_descriptors(self):
        """Explicit descriptors bypass introspection."""
        descriptors = [
            ColumnDescriptor("id", "id", primary_key=True),
            ColumnDescriptor("name", "name"),
        ]
        metadata = derive_metadata(descriptors, table_name="person")

        assert metadata.table_name == "person"
        assert metadata.columns == ("id", "name")
        assert metadata.primary_key_index == (0,)

    def test_explicit_descriptors_without_table_name(self):
        """Descriptor sequences have no class name to default to."""
        metadata = derive_metadata([ColumnDescriptor("id", "id", primary_key=True)])
        assert metadata.table_name == ""

    def test_unsupported_model(self):
        """Plain classes cannot be described."""

        class Plain:
            id = "x"

        with pytest.raises(BuilderConfigurationError, match="Plain"):
            derive_metadata(Plain)

    @pytest.mark.parametrize("model_fixture", ["person_cls", "member_cls", "enrollment_cls"])
    def test_partition_invariants(self, model_fixture, request):
        """Partitions recombine into columns and the key index tracks key columns."""
        metadata = derive_metadata(request.getfixturevalue(model_fixture))

        keys = set(metadata.primary_key_columns)
        recombined = tuple(
            c for c in metadata.columns if c in keys or c in metadata.non_primary_key_columns
        )
        assert recombined == metadata.columns
        assert len(metadata.primary_key_index) == len(metadata.primary_key_columns)
        assert tuple(metadata.columns[i] for i in metadata.primary_key_index) == metadata.primary_key_columns
