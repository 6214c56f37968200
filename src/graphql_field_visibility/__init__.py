"""Pattern-based field visibility for GraphQL-style schemas."""

from graphql_field_visibility.config import VisibilityConfig
from graphql_field_visibility.core import (
    DEFAULT_FIELD_VISIBILITY,
    NO_INTROSPECTION_FIELD_VISIBILITY,
    BlockedFields,
    BlockedFieldsBuilder,
    DefaultFieldVisibility,
    FieldDefinitionLike,
    FieldsContainer,
    FieldVisibility,
    NoIntrospectionFieldVisibility,
    PatternSyntaxError,
)
from graphql_field_visibility.schema import (
    FieldDefinition,
    ObjectType,
    object_type_from_model,
    visible_dict,
)

__version__ = "0.1.0"
__all__ = [
    "BlockedFields",
    "BlockedFieldsBuilder",
    "DEFAULT_FIELD_VISIBILITY",
    "DefaultFieldVisibility",
    "FieldDefinition",
    "FieldDefinitionLike",
    "FieldVisibility",
    "FieldsContainer",
    "NO_INTROSPECTION_FIELD_VISIBILITY",
    "NoIntrospectionFieldVisibility",
    "ObjectType",
    "PatternSyntaxError",
    "VisibilityConfig",
    "object_type_from_model",
    "visible_dict",
]
