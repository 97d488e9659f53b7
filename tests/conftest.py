"""Shared fixtures for tests."""

from pathlib import Path

import pytest
import structlog

from searchpaths.graph.builder import build_graph
from searchpaths.schema.loader import parse_schema_from_string


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def post_comment_yaml() -> str:
    """Return a post/comment schema with relations in both directions."""
    return """
entities:
  Post:
    searchable: true
    relations:
      comments: {has_many: Comment}

  Comment:
    relations:
      post: {belongs_to: Post}
"""


@pytest.fixture
def blog_yaml() -> str:
    """Return a schema with posts, comments, users and tags."""
    return """
entities:
  Post:
    searchable: true
    relations:
      comments: {has_many: Comment}
      author: {belongs_to: User}
      tags:
        type: belongs_to_many
        target: Tag
        follow: never

  Comment:
    relations:
      post: {belongs_to: Post}
      author:
        type: belongs_to
        target: User
        doc: "The commenter. @follow UNLESS Post"

  User:
    searchable: true
    relations:
      posts: {has_many: Post}
      comments: {has_many: Comment}

  Tag:
    relations:
      posts: {belongs_to_many: Post}
"""


@pytest.fixture
def post_comment_schema(post_comment_yaml):
    """Return a parsed post/comment schema."""
    return parse_schema_from_string(post_comment_yaml)


@pytest.fixture
def post_comment_graph(post_comment_schema):
    """Return a graph built from the post/comment schema."""
    return build_graph(post_comment_schema)


@pytest.fixture
def blog_schema(blog_yaml):
    """Return a parsed blog schema."""
    return parse_schema_from_string(blog_yaml)


@pytest.fixture
def blog_graph(blog_schema):
    """Return a graph built from the blog schema."""
    return build_graph(blog_schema)
