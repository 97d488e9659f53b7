"""Relation graphs built by introspecting Python entity classes.

Entity classes subclass :class:`Searchable` and declare relations as
methods annotated to return a :class:`Relation`::

    class Post(Searchable):
        def comments(self) -> Relation:
            return has_many(Comment)

        def author(self) -> Relation:
            \"\"\"@follow UNLESS User\"\"\"
            return belongs_to(User)

Only methods defined in the class body itself are inspected; relations
declared on a base class are not reflected into subclasses. A method that
is annotated as a relation but raises or returns something else is skipped.
"""

import importlib
import inspect
from collections import deque
from typing import Any, Iterable, Iterator

import structlog

from .graph.node_types import RelationKind
from .graph.relation_graph import RelationGraph
from .policy import parse_policy
from .schema.errors import SchemaLoadError, SchemaValidationError

logger = structlog.get_logger(__name__)


class Relation:
    """Relation descriptor returned by relation methods."""

    def __init__(self, target: type, kind: RelationKind = RelationKind.HAS_ONE):
        self.target = target
        self.kind = RelationKind(kind)

    def __repr__(self) -> str:
        target = getattr(self.target, "__name__", repr(self.target))
        return f"Relation({target}, {self.kind.value})"


def has_one(target: type) -> Relation:
    return Relation(target, RelationKind.HAS_ONE)


def has_many(target: type) -> Relation:
    return Relation(target, RelationKind.HAS_MANY)


def belongs_to(target: type) -> Relation:
    return Relation(target, RelationKind.BELONGS_TO)


def belongs_to_many(target: type) -> Relation:
    return Relation(target, RelationKind.BELONGS_TO_MANY)


class Searchable:
    """Marker base class for entity classes that are indexed."""


def entity_name(cls: type) -> str:
    """Entity type name of a class: its own ``__entity__`` or its class name."""
    return cls.__dict__.get("__entity__", cls.__name__)


def _returns_relation(func: Any) -> bool:
    annotation = getattr(func, "__annotations__", {}).get("return")
    if annotation is Relation:
        return True
    return isinstance(annotation, str) and annotation.rsplit(".", 1)[-1] == "Relation"


def iter_declared_relations(cls: type) -> Iterator[tuple[str, Relation, str | None]]:
    """Yield ``(name, relation, docstring)`` for relation methods declared on ``cls``."""
    try:
        instance = cls.__new__(cls)
    except Exception as e:
        logger.debug("relations_skipped", entity=cls.__name__, error=str(e))
        return

    for name, member in vars(cls).items():
        if not inspect.isfunction(member) or not _returns_relation(member):
            continue

        try:
            value = getattr(instance, name)()
        except Exception as e:
            logger.debug("relation_skipped", entity=cls.__name__, member=name, error=str(e))
            continue

        if not isinstance(value, Relation) or not isinstance(value.target, type):
            logger.debug(
                "relation_skipped",
                entity=cls.__name__,
                member=name,
                value_type=type(value).__name__,
            )
            continue

        yield name, value, inspect.getdoc(member)


def _entity_parents(cls: type) -> list[type]:
    return [
        base
        for base in cls.__bases__
        if base is not Searchable and issubclass(base, Searchable)
    ]


def build_graph_from_classes(classes: Iterable[type]) -> RelationGraph:
    """Build a RelationGraph from entity classes and every class they reach.

    Args:
        classes: Root entity classes.

    Returns:
        A RelationGraph with one entity per reached class.

    Raises:
        SchemaValidationError: If two distinct classes share an entity name.
    """
    graph = RelationGraph()
    seen: dict[str, type] = {}
    queue: deque[type] = deque(classes)

    while queue:
        cls = queue.popleft()
        name = entity_name(cls)

        known = seen.get(name)
        if known is cls:
            continue
        if known is not None:
            raise SchemaValidationError(
                f"Entity name '{name}' is used by both {known.__module__}.{known.__qualname__} "
                f"and {cls.__module__}.{cls.__qualname__}"
            )
        seen[name] = cls

        graph.add_entity(name, searchable=issubclass(cls, Searchable), cls=cls)

        for parent in _entity_parents(cls):
            graph.add_parent(name, entity_name(parent))
            queue.append(parent)

        for relation_name, relation, doc in iter_declared_relations(cls):
            graph.add_relation(
                name,
                relation_name,
                entity_name(relation.target),
                relation.kind,
                policy=parse_policy(doc),
                annotation=doc,
            )
            queue.append(relation.target)

    logger.debug("class_graph_built", entities=len(seen))
    return graph


def load_class(reference: str) -> type:
    """Import a class from a ``module:Class`` reference.

    Raises:
        SchemaLoadError: If the module or class cannot be loaded.
    """
    module_name, _, attr_path = reference.partition(":")
    if not module_name or not attr_path:
        raise SchemaLoadError(f"Expected 'module:Class', got '{reference}'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise SchemaLoadError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise SchemaLoadError(f"'{module_name}' has no attribute '{attr_path}'") from e

    if not isinstance(obj, type):
        raise SchemaLoadError(f"'{reference}' is not a class")
    return obj
