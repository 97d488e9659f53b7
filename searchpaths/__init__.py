"""Relation-path compiler for search indexing."""

from .compiler import CompiledPaths, PathCompiler, RelationDiscoverer, compile_paths
from .errors import CompilationError, ErrorKind
from .graph import RelationEdge, RelationGraph, RelationKind, build_graph
from .policy import FollowMode, FollowPolicy, parse_policy, should_follow

__all__ = [
    "CompiledPaths",
    "PathCompiler",
    "RelationDiscoverer",
    "compile_paths",
    "CompilationError",
    "ErrorKind",
    "RelationEdge",
    "RelationGraph",
    "RelationKind",
    "build_graph",
    "FollowMode",
    "FollowPolicy",
    "parse_policy",
    "should_follow",
]
