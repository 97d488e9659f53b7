"""Tests for RelationGraph."""

from searchpaths.graph.node_types import EdgeType, NodeType, RelationKind
from searchpaths.graph.relation_graph import RelationGraph
from searchpaths.policy import FollowPolicy


class TestRelationGraphBasics:
    def test_add_entity(self):
        graph = RelationGraph()
        node_id = graph.add_entity("Post", searchable=True, custom_attr="value")

        assert node_id == "entity:Post"
        assert graph.has_entity("Post")

        node = graph.graph.nodes["entity:Post"]
        assert node["node_type"] == NodeType.ENTITY
        assert node["searchable"] is True
        assert node["custom_attr"] == "value"

    def test_add_relation(self):
        graph = RelationGraph()
        graph.add_entity("Post")
        graph.add_entity("Comment")
        edge = graph.add_relation("Post", "comments", "Comment", "has_many")

        assert edge.source == "Post"
        assert edge.kind == RelationKind.HAS_MANY
        assert edge.policy == FollowPolicy.always()
        assert graph.get_relations("Post") == [edge]
        assert graph.get_relations("Comment") == []

    def test_unknown_kind_defaults_to_has_one(self):
        graph = RelationGraph()
        edge = graph.add_relation("Post", "x", "Comment", "owns")
        assert edge.kind == RelationKind.HAS_ONE

    def test_several_relations_between_same_pair(self):
        graph = RelationGraph()
        graph.add_entity("Post")
        graph.add_entity("User")
        graph.add_relation("Post", "author", "User")
        graph.add_relation("Post", "editor", "User")

        assert [e.name for e in graph.relations_between("Post", "User")] == ["author", "editor"]
        assert graph.graph.number_of_edges("entity:Post", "entity:User") == 2

    def test_declaration_order_across_targets(self):
        graph = RelationGraph()
        for name in ("Post", "User", "Comment"):
            graph.add_entity(name)
        graph.add_relation("Post", "author", "User")
        graph.add_relation("Post", "comments", "Comment")
        graph.add_relation("Post", "editor", "User")

        assert [e.name for e in graph.get_relations("Post")] == ["author", "comments", "editor"]


class TestRelationGraphQueries:
    def test_referenced_but_undefined(self):
        graph = RelationGraph()
        graph.add_entity("Post")
        graph.add_relation("Post", "author", "Writer")

        assert not graph.has_entity("Writer")
        assert graph.graph.has_node("entity:Writer")
        assert "node_type" not in graph.graph.nodes["entity:Writer"]
        assert graph.get_entity_names() == ["Post"]

    def test_is_a_is_transitive(self):
        graph = RelationGraph()
        for name in ("Media", "Video", "Clip"):
            graph.add_entity(name)
        graph.add_parent("Video", "Media")
        graph.add_parent("Clip", "Video")

        assert graph.is_a("Clip", "Clip")
        assert graph.is_a("Clip", "Media")
        assert not graph.is_a("Media", "Clip")

    def test_extends_edges_are_not_relations(self):
        graph = RelationGraph()
        graph.add_entity("Media")
        graph.add_entity("Video")
        graph.add_parent("Video", "Media")

        assert graph.get_relations("Video") == []
        edge_types = {d["edge_type"] for _, _, d in graph.graph.edges(data=True)}
        assert edge_types == {EdgeType.EXTENDS}

    def test_iter_relations(self, blog_graph):
        names = [(e.source, e.name) for e in blog_graph.iter_relations()]

        assert ("Post", "comments") in names
        assert ("Tag", "posts") in names
        assert len(names) == 8
