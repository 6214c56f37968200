"""
Module for pattern-based field visibility over GraphQL-style schemas.
A visibility strategy decides which fields of a fields container are exposed
to queries and introspection. BlockedFields hides every field whose
fully-qualified name ("Type.field") fully matches one of its patterns.

Type and field names live in the namespace "[_A-Za-z][_0-9A-Za-z]*", so the
"." separator never appears inside either part of a fully-qualified name.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from re import Pattern
from typing import (
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

logger = logging.getLogger(__name__)

INTROSPECTION_FIELDS = frozenset({"__schema", "__type"})


class PatternSyntaxError(ValueError):
    """Raised when a blocked-field pattern is not a valid regular expression."""

    def __init__(self, pattern: str, message: str) -> None:
        super().__init__(f"Invalid field pattern {pattern!r}: {message}")
        self.pattern = pattern


@runtime_checkable
class FieldDefinitionLike(Protocol):
    @property
    def name(self) -> str: ...


@runtime_checkable
class FieldsContainer(Protocol):
    """Anything with a name that can enumerate and look up its fields."""

    @property
    def name(self) -> str: ...

    def get_field_definitions(self) -> Sequence[FieldDefinitionLike]: ...

    def get_field_definition(self, name: str) -> Optional[FieldDefinitionLike]: ...


def mk_fqn(container: FieldsContainer, field_definition: FieldDefinitionLike) -> str:
    return container.name + "." + field_definition.name


class FieldVisibility(ABC):
    """
    Strategy deciding which fields of a container are visible.
    """

    @abstractmethod
    def get_field_definitions(
        self, container: FieldsContainer
    ) -> List[FieldDefinitionLike]:
        """Return the visible fields of the container, in container order."""

    @abstractmethod
    def get_field_definition(
        self, container: FieldsContainer, field_name: str
    ) -> Optional[FieldDefinitionLike]:
        """Return the named field if it exists and is visible, else None."""


class DefaultFieldVisibility(FieldVisibility):
    """Every field is visible."""

    def get_field_definitions(
        self, container: FieldsContainer
    ) -> List[FieldDefinitionLike]:
        return list(container.get_field_definitions())

    def get_field_definition(
        self, container: FieldsContainer, field_name: str
    ) -> Optional[FieldDefinitionLike]:
        return container.get_field_definition(field_name)

    def __repr__(self) -> str:
        return "DefaultFieldVisibility()"


DEFAULT_FIELD_VISIBILITY = DefaultFieldVisibility()


class NoIntrospectionFieldVisibility(FieldVisibility):
    """
    Hides the "__schema" and "__type" entry points on every container and
    leaves the remaining decisions to a delegate strategy.
    """

    def __init__(self, delegate: Optional[FieldVisibility] = None) -> None:
        self._delegate = delegate or DEFAULT_FIELD_VISIBILITY

    @property
    def delegate(self) -> FieldVisibility:
        return self._delegate

    def get_field_definitions(
        self, container: FieldsContainer
    ) -> List[FieldDefinitionLike]:
        return [
            fd
            for fd in self._delegate.get_field_definitions(container)
            if fd.name not in INTROSPECTION_FIELDS
        ]

    def get_field_definition(
        self, container: FieldsContainer, field_name: str
    ) -> Optional[FieldDefinitionLike]:
        if field_name in INTROSPECTION_FIELDS:
            return None
        return self._delegate.get_field_definition(container, field_name)

    def __repr__(self) -> str:
        return f"NoIntrospectionFieldVisibility(delegate={self._delegate!r})"


NO_INTROSPECTION_FIELD_VISIBILITY = NoIntrospectionFieldVisibility()


class BlockedFields(FieldVisibility):
    """
    Takes a list of regular expressions and matches them against the
    fully-qualified name of a type and its fields. An object type "User" with a
    field "firstName" has the fully-qualified name "User.firstName".

    A pattern must match the whole name: "User\\.first.*" blocks
    "User.firstName", "first" does not.
    """

    def __init__(self, patterns: Iterable[Pattern[str]]) -> None:
        self._patterns: Tuple[Pattern[str], ...] = tuple(patterns)

    @classmethod
    def new_block(cls) -> BlockedFieldsBuilder:
        return BlockedFieldsBuilder()

    @property
    def patterns(self) -> Tuple[Pattern[str], ...]:
        return self._patterns

    def get_field_definitions(
        self, container: FieldsContainer
    ) -> List[FieldDefinitionLike]:
        return [
            fd
            for fd in container.get_field_definitions()
            if not self.block(mk_fqn(container, fd))
        ]

    def get_field_definition(
        self, container: FieldsContainer, field_name: str
    ) -> Optional[FieldDefinitionLike]:
        field_definition = container.get_field_definition(field_name)
        if field_definition is not None and self.block(
            mk_fqn(container, field_definition)
        ):
            return None
        return field_definition

    def block(self, fqn: str) -> bool:
        for pattern in self._patterns:
            if pattern.fullmatch(fqn):
                logger.debug("Field %s blocked by pattern %r", fqn, pattern.pattern)
                return True
        return False

    def __repr__(self) -> str:
        return f"BlockedFields(patterns={[p.pattern for p in self._patterns]!r})"


class BlockedFieldsBuilder:
    """
    Accumulates patterns and builds immutable BlockedFields instances.
    Every add method returns the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._patterns: List[Pattern[str]] = []

    def add_pattern(self, regex_pattern: str) -> BlockedFieldsBuilder:
        try:
            compiled = re.compile(regex_pattern)
        except re.error as e:
            raise PatternSyntaxError(regex_pattern, str(e)) from e
        return self.add_compiled_pattern(compiled)

    def add_patterns(self, regex_patterns: Iterable[str]) -> BlockedFieldsBuilder:
        for regex_pattern in regex_patterns:
            self.add_pattern(regex_pattern)
        return self

    def add_compiled_pattern(self, regex: Pattern[str]) -> BlockedFieldsBuilder:
        if not isinstance(regex, Pattern) or not isinstance(regex.pattern, str):
            raise TypeError(f"Expected a compiled str pattern, got {regex!r}")
        self._patterns.append(regex)
        return self

    def add_compiled_patterns(
        self, regexes: Iterable[Pattern[str]]
    ) -> BlockedFieldsBuilder:
        for regex in regexes:
            self.add_compiled_pattern(regex)
        return self

    def build(self) -> BlockedFields:
        logger.debug("Building BlockedFields with %d pattern(s)", len(self._patterns))
        return BlockedFields(self._patterns)
