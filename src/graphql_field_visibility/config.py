"""
Declarative visibility configuration.
"""

from __future__ import annotations

import logging
import re
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from graphql_field_visibility.core import (
    DEFAULT_FIELD_VISIBILITY,
    BlockedFields,
    FieldVisibility,
    NoIntrospectionFieldVisibility,
)

logger = logging.getLogger(__name__)


class VisibilityConfig(BaseModel):
    """
    Visibility rules for a schema.

    Attributes:
        blocked_fields: Patterns matched against "Type.field" names.
        disable_introspection: Hide "__schema" and "__type" as well.
    """

    model_config = ConfigDict(extra="forbid")

    blocked_fields: List[str] = Field(default_factory=list)
    disable_introspection: bool = False

    @field_validator("blocked_fields")
    @classmethod
    def _check_patterns(cls, v: List[str]) -> List[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid field pattern {pattern!r}: {e}")
        return v

    @classmethod
    def from_json(cls, text: str) -> VisibilityConfig:
        return cls.model_validate_json(text)

    def build_visibility(self) -> FieldVisibility:
        """
        Build the visibility strategy described by this configuration.
        """
        visibility: FieldVisibility = DEFAULT_FIELD_VISIBILITY
        if self.blocked_fields:
            visibility = BlockedFields.new_block().add_patterns(self.blocked_fields).build()
        if self.disable_introspection:
            visibility = NoIntrospectionFieldVisibility(visibility)
        logger.debug("Configured field visibility: %r", visibility)
        return visibility
