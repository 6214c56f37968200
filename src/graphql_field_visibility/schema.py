"""
Pydantic-backed schema values that satisfy the fields container protocol,
plus helpers to expose pydantic models through a visibility strategy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, model_validator

from graphql_field_visibility.core import FieldVisibility

logger = logging.getLogger(__name__)

NAME_PATTERN = r"^[_A-Za-z][_0-9A-Za-z]*$"


class FieldDefinition(BaseModel):
    """A named field of an object type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=NAME_PATTERN)
    description: Optional[str] = None
    type_name: Optional[str] = None


class ObjectType(BaseModel):
    """
    A named, ordered collection of field definitions.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=NAME_PATTERN)
    field_definitions: Tuple[FieldDefinition, ...] = ()

    @model_validator(mode="after")
    def _check_unique_field_names(self) -> ObjectType:
        seen = set()
        for fd in self.field_definitions:
            if fd.name in seen:
                raise ValueError(f"Duplicate field {fd.name!r} on type {self.name!r}")
            seen.add(fd.name)
        return self

    def get_field_definitions(self) -> List[FieldDefinition]:
        return list(self.field_definitions)

    def get_field_definition(self, name: str) -> Optional[FieldDefinition]:
        for fd in self.field_definitions:
            if fd.name == name:
                return fd
        return None


def _type_display_name(annotation: Any) -> Optional[str]:
    if annotation is None:
        return None
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _model_type_name(model_cls: Type[BaseModel]) -> str:
    # Parametrized generics are named like "Page[int]"
    origin = model_cls.__pydantic_generic_metadata__.get("origin")
    return (origin or model_cls).__name__


def object_type_from_model(
    model_cls: Type[BaseModel], name: Optional[str] = None
) -> ObjectType:
    """
    Describe a pydantic model class as an ObjectType.

    Args:
        model_cls: The pydantic model class.
        name: Type name to use instead of the class name.

    Returns:
        ObjectType with one field per model field, in declaration order.
    """
    fields = [
        FieldDefinition(
            name=field_name,
            description=field_info.description,
            type_name=_type_display_name(field_info.annotation),
        )
        for field_name, field_info in model_cls.model_fields.items()
    ]
    return ObjectType(
        name=name or _model_type_name(model_cls), field_definitions=tuple(fields)
    )


def visible_dict(
    instance: BaseModel, visibility: FieldVisibility, name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Convert a model instance to a dictionary keeping only the fields the
    strategy leaves visible. Nested models, including those inside lists,
    tuples and dict values, are filtered against their own type.

    Args:
        instance: The model instance to convert.
        visibility: The strategy deciding which fields are visible.
        name: Type name to use for the top-level model instead of its class name.

    Returns:
        Dictionary of visible field names to converted values.
    """
    object_type = object_type_from_model(type(instance), name)
    visible_fields = visibility.get_field_definitions(object_type)
    if len(visible_fields) < len(object_type.field_definitions):
        visible_names = {fd.name for fd in visible_fields}
        hidden = [
            fd.name for fd in object_type.field_definitions if fd.name not in visible_names
        ]
        logger.debug("Hiding %s on %s", ", ".join(hidden), object_type.name)

    return {
        fd.name: _convert_value(getattr(instance, fd.name), visibility)
        for fd in visible_fields
    }


def _convert_value(value: Any, visibility: FieldVisibility) -> Any:
    if isinstance(value, BaseModel):
        return visible_dict(value, visibility)
    if isinstance(value, list):
        return [_convert_value(item, visibility) for item in value]
    if isinstance(value, tuple):
        return tuple(_convert_value(item, visibility) for item in value)
    if isinstance(value, dict):
        return {k: _convert_value(v, visibility) for k, v in value.items()}
    return value
