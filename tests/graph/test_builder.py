"""Tests for graph builder."""

from searchpaths.graph.builder import build_graph, relation_policy
from searchpaths.graph.node_types import RelationKind
from searchpaths.policy import FollowMode, FollowPolicy
from searchpaths.schema.loader import parse_schema_from_string
from searchpaths.schema.models import RelationSpec


class TestBuildGraph:
    def test_build_entities(self, blog_schema):
        graph = build_graph(blog_schema)

        assert set(graph.get_entity_names()) == {"Post", "Comment", "User", "Tag"}
        assert set(graph.get_searchable_entity_names()) == {"Post", "User"}

    def test_build_relations_in_declaration_order(self, blog_schema):
        graph = build_graph(blog_schema)

        relations = graph.get_relations("Post")
        assert [r.name for r in relations] == ["comments", "author", "tags"]
        assert relations[0].kind == RelationKind.HAS_MANY
        assert relations[2].policy == FollowPolicy.never()

    def test_doc_directive_becomes_policy(self, blog_schema):
        graph = build_graph(blog_schema)

        author = graph.relations_between("Comment", "User")[0]
        assert author.policy == FollowPolicy.unless_root("Post")
        assert "@follow UNLESS Post" in author.annotation

    def test_build_extends(self):
        yaml = """
entities:
  Media: {}
  Video:
    extends: Media
"""
        graph = build_graph(parse_schema_from_string(yaml))

        assert graph.get_parents("Video") == ["Media"]
        assert graph.is_a("Video", "Media")
        assert not graph.is_a("Media", "Video")


class TestRelationPolicy:
    def test_follow_and_doc_are_combined(self):
        rel = RelationSpec(
            name="author",
            type="belongs_to",
            target="User",
            follow="unless Post",
            doc="@follow UNLESS Comment",
        )

        policy = relation_policy(rel)
        assert policy.mode == FollowMode.UNLESS
        assert policy.unless == ("Post", "Comment")

    def test_never_in_doc_wins(self):
        rel = RelationSpec(
            name="author", type="belongs_to", target="User", follow="always", doc="@follow NEVER"
        )
        assert relation_policy(rel) == FollowPolicy.never()

    def test_no_annotation_means_always(self):
        rel = RelationSpec(name="author", type="belongs_to", target="User")
        assert relation_policy(rel) == FollowPolicy.always()
