"""Relation-path compilation."""

from .compiler import PathCompiler, compile_paths
from .discovery import RelationDiscoverer
from .result import CompiledPaths

__all__ = [
    "PathCompiler",
    "compile_paths",
    "RelationDiscoverer",
    "CompiledPaths",
]
