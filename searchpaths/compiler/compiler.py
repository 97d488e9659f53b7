"""Recursive compilation of forward and reverse relation paths."""

from typing import Iterable

import structlog

from ..errors import CompilationError, ErrorKind
from ..graph.relation_graph import RelationEdge, RelationGraph
from ..policy import should_follow
from ..validators.policy_targets import check_policy_targets
from .discovery import RelationDiscoverer
from .result import CompiledPaths

logger = structlog.get_logger(__name__)


def _join_reversed(segments: list[str]) -> str:
    return ".".join(reversed(segments))


class PathCompiler:
    """Walks the relation graph from root entity types.

    For every root, each leaf reached yields a forward path (relation names
    from the root to the leaf, used for eager loading). Every visited type
    gets the reverse paths leading from it back to the root (used to find
    the roots to reindex when the visited type changes).

    One compiler is one run: discovered relations are cached across the
    roots compiled by it and results accumulate in ``result``.
    """

    def __init__(self, graph: RelationGraph, follow_relations: bool = False):
        """Initialize the compiler.

        Args:
            graph: The relation graph to walk.
            follow_relations: When False every root is a leaf and only
                the empty path is recorded.
        """
        self.graph = graph
        self.follow_relations = follow_relations
        self.result = CompiledPaths()
        self.discoverer = RelationDiscoverer(graph, self.result.diagnostics)

    def compile(self, root: str) -> None:
        """Compile the paths of one root entity type into ``result``.

        Raises:
            CompilationError: If the root is undefined or yields no path.
        """
        if not self.graph.has_entity(root):
            raise CompilationError(
                f"Entity type '{root}' is not defined", ErrorKind.UNKNOWN_ENTITY, entity=root
            )

        before = len(self.result.paths_for(root))
        self._visit(root, root, root, [], [], (root,))

        found = len(self.result.paths_for(root)) - before
        if found == 0:
            raise CompilationError(
                f"Entity type '{root}' produced no path", ErrorKind.NO_ROOT_PATH, entity=root
            )
        logger.info("root_compiled", root=root, paths=found)

    def compile_all(self, roots: Iterable[str]) -> CompiledPaths:
        """Compile several roots one after the other and return the result."""
        for root in roots:
            self.compile(root)

        self.result.diagnostics.merge(
            check_policy_targets(self.graph, self.discoverer.discovered_edges())
        )
        return self.result

    def _visit(
        self,
        entity_name: str,
        ancestor: str,
        start: str,
        path: list[str],
        reversed_path: list[str],
        on_path: tuple[str, ...],
    ) -> None:
        followed = False

        if self.follow_relations:
            for edge in self.discoverer.discover(entity_name):
                if not self._can_follow(edge, ancestor, start, on_path):
                    continue

                # The target's own relations hold the way back
                self.discoverer.discover(edge.target)
                back = self.discoverer.reverse_name(edge.target, entity_name)
                if back is None:
                    self.result.diagnostics.add_warning(
                        code=ErrorKind.MISSING_REVERSE_RELATION,
                        message=(
                            f"'{edge.target}' has no relation back to '{entity_name}' "
                            f"for relation '{edge.name}'"
                        ),
                        entity=entity_name,
                        relation=edge.name,
                        target=edge.target,
                    )
                    back = ""

                followed = True
                self.result.add_reversed_path(entity_name, _join_reversed(reversed_path))

                logger.debug(
                    "relation_followed",
                    root=start,
                    entity=entity_name,
                    relation=edge.name,
                    target=edge.target,
                )
                self._visit(
                    edge.target,
                    entity_name,
                    start,
                    path + [edge.name],
                    reversed_path + [back],
                    on_path + (edge.target,),
                )

        if not followed:
            self.result.add_path(start, ".".join(path))
            self.result.add_reversed_path(entity_name, _join_reversed(reversed_path))

    def _can_follow(
        self, edge: RelationEdge, ancestor: str, start: str, on_path: tuple[str, ...]
    ) -> bool:
        if not self.graph.has_entity(edge.target):
            self.result.diagnostics.add_error(
                code=ErrorKind.UNDEFINED_TARGET,
                message=f"Relation '{edge.name}' references undefined entity '{edge.target}'",
                entity=edge.source,
                relation=edge.name,
                target=edge.target,
            )
            return False

        if self.graph.is_a(edge.target, ancestor) or self.graph.is_a(edge.target, start):
            return False

        if edge.target in on_path:
            logger.debug(
                "cycle_skipped", entity=edge.source, relation=edge.name, target=edge.target
            )
            return False

        return should_follow(edge.policy, start)


def compile_paths(
    graph: RelationGraph, roots: Iterable[str], follow_relations: bool = False
) -> CompiledPaths:
    """Compile forward and reverse paths for the given root entity types.

    Args:
        graph: The relation graph.
        roots: Root entity type names, compiled in order.
        follow_relations: Whether to walk relations at all.

    Returns:
        The compiled paths. An empty ``roots`` yields an empty result.
    """
    return PathCompiler(graph, follow_relations=follow_relations).compile_all(roots)
