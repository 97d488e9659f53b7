"""Tests for schema loader."""

import pytest

from searchpaths.schema.errors import SchemaLoadError, SchemaValidationError
from searchpaths.schema.loader import (
    load_yaml,
    parse_schema,
    parse_schema_from_string,
    parse_schemas,
)


class TestLoadYaml:
    def test_load_valid_yaml(self, tmp_path):
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("key: value\nlist:\n  - item1\n  - item2")

        data = load_yaml(yaml_file)
        assert data["key"] == "value"
        assert data["list"] == ["item1", "item2"]

    def test_file_not_found(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml("/nonexistent/path.yaml")
        assert "does not exist" in str(exc_info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(tmp_path)
        assert "not a file" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("key: [unclosed bracket")

        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "Malformed YAML" in str(exc_info.value)
        assert exc_info.value.path == str(yaml_file)

    def test_empty_file_returns_empty_dict(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert load_yaml(yaml_file) == {}

    def test_non_mapping_at_root(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- item1\n- item2")

        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "mapping" in str(exc_info.value).lower()


class TestParseSchemaFromString:
    def test_parse_minimal_schema(self, post_comment_yaml):
        schema = parse_schema_from_string(post_comment_yaml)

        assert list(schema.entities) == ["Post", "Comment"]
        assert schema.entities["Post"].relations[0].name == "comments"

    def test_parse_empty_schema(self):
        schema = parse_schema_from_string("")
        assert len(schema.entities) == 0

    def test_invalid_yaml_string(self):
        with pytest.raises(SchemaLoadError):
            parse_schema_from_string("invalid: [yaml")

    def test_non_mapping_string(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            parse_schema_from_string("- Post\n- Comment")
        assert "got list" in str(exc_info.value)
        assert exc_info.value.path is None

    def test_invalid_relation_kind(self):
        yaml_str = """
entities:
  Post:
    relations:
      - name: comments
        type: has_lots
        target: Comment
"""
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_schema_from_string(yaml_str)

        assert exc_info.value.errors
        assert "entities.Post.relations.0.type" in exc_info.value.errors[0]["loc"]


class TestParseSchema:
    def test_parse_example_file(self, examples_dir):
        schema = parse_schema(examples_dir / "minimal_valid.yaml")

        assert "Post" in schema.entities
        assert "Comment" in schema.entities

    def test_parse_schemas_merges_files(self, examples_dir):
        schema = parse_schemas(
            [examples_dir / "blog" / "blog.yaml", examples_dir / "blog" / "media.yml"]
        )

        assert set(list(schema.entities)) == {"Post", "Comment", "User", "Tag", "Image"}

    def test_later_file_overrides_entity(self, tmp_path):
        first = tmp_path / "a.yaml"
        first.write_text("entities:\n  Post:\n    searchable: false\n")
        second = tmp_path / "b.yaml"
        second.write_text("entities:\n  Post:\n    searchable: true\n")

        schema = parse_schemas([first, second])
        assert schema.entities["Post"].searchable is True
