"""Follow policies attached to relation edges.

A relation can be annotated so that path compilation never walks it, or
walks it unless the compilation started at a particular entity type. The
annotation is either free-form documentation carrying ``@follow``
directives::

    @follow NEVER
    @follow UNLESS Post

or a structured ``follow`` value in a schema file (``never``, ``always``,
``unless Post``, ``{unless: [Post, User]}``).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

_NEVER_DIRECTIVE = re.compile(r"@follow\s+NEVER\b")
_UNLESS_DIRECTIVE = re.compile(r"@follow\s+UNLESS\s+([A-Za-z_][\w.\\]*)")


class FollowMode(str, Enum):
    """How a relation is treated during traversal."""

    ALWAYS = "always"
    NEVER = "never"
    UNLESS = "unless"


@dataclass(frozen=True)
class FollowPolicy:
    """Structured follow policy of a single relation edge."""

    mode: FollowMode = FollowMode.ALWAYS
    unless: tuple[str, ...] = ()

    @classmethod
    def always(cls) -> "FollowPolicy":
        return cls()

    @classmethod
    def never(cls) -> "FollowPolicy":
        return cls(mode=FollowMode.NEVER)

    @classmethod
    def unless_root(cls, *type_names: str) -> "FollowPolicy":
        if not type_names:
            return cls()
        return cls(mode=FollowMode.UNLESS, unless=tuple(dict.fromkeys(type_names)))

    def allows(self, start_type: str) -> bool:
        """Check whether a traversal rooted at ``start_type`` may follow the edge."""
        if self.mode == FollowMode.NEVER:
            return False
        if self.mode == FollowMode.UNLESS and start_type in self.unless:
            return False
        return True

    def combine(self, other: "FollowPolicy") -> "FollowPolicy":
        """Merge two policies; NEVER dominates, UNLESS names are united."""
        if FollowMode.NEVER in (self.mode, other.mode):
            return FollowPolicy.never()
        return FollowPolicy.unless_root(*self.unless, *other.unless)

    @classmethod
    def from_value(cls, value: Any) -> "FollowPolicy":
        """Build a policy from a schema ``follow`` value.

        Unrecognized values are logged and treated as ``always``.
        """
        if value is None or isinstance(value, FollowPolicy):
            return value or cls()

        if isinstance(value, str):
            return _policy_from_string(value)

        if isinstance(value, (list, tuple)):
            return cls.unless_root(*(str(v) for v in value))

        if isinstance(value, dict):
            if value.get("never"):
                return cls.never()
            unless = value.get("unless")
            if isinstance(unless, str):
                return cls.unless_root(unless)
            if isinstance(unless, (list, tuple)):
                return cls.unless_root(*(str(v) for v in unless))

        logger.warning("unrecognized_follow_policy", value=repr(value))
        return cls()

    def __str__(self) -> str:
        if self.mode == FollowMode.UNLESS:
            return "unless " + " ".join(self.unless)
        return self.mode.value


def _policy_from_string(value: str) -> FollowPolicy:
    if "@follow" in value:
        return parse_policy(value)

    tokens = value.split()
    if not tokens:
        return FollowPolicy()

    keyword = tokens[0].lower()
    if keyword == "always" and len(tokens) == 1:
        return FollowPolicy()
    if keyword == "never" and len(tokens) == 1:
        return FollowPolicy.never()
    if keyword == "unless" and len(tokens) > 1:
        return FollowPolicy.unless_root(*tokens[1:])

    logger.warning("unrecognized_follow_policy", value=value)
    return FollowPolicy()


def parse_policy(annotation: str | None) -> FollowPolicy:
    """Extract ``@follow`` directives from annotation text.

    Only ``@follow NEVER`` and ``@follow UNLESS <Type>`` are recognized;
    any other text has no effect.
    """
    if not annotation:
        return FollowPolicy()

    if _NEVER_DIRECTIVE.search(annotation):
        return FollowPolicy.never()

    names = [name.rstrip(".") for name in _UNLESS_DIRECTIVE.findall(annotation)]
    return FollowPolicy.unless_root(*(n for n in names if n))


def should_follow(annotation: "str | FollowPolicy | None", start_type: str) -> bool:
    """Decide whether a relation is followed for a traversal rooted at ``start_type``.

    Args:
        annotation: The edge's annotation text or an already parsed policy.
        start_type: Name of the entity type the traversal started from.

    Returns:
        False for NEVER, or for UNLESS naming exactly ``start_type``; True otherwise.
    """
    if not isinstance(annotation, FollowPolicy):
        annotation = parse_policy(annotation)
    return annotation.allows(start_type)
