"""
Tests for the pydantic-backed schema values and model helpers.
"""
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

import pytest
from pydantic import BaseModel, Field, ValidationError

from graphql_field_visibility import (
    DEFAULT_FIELD_VISIBILITY,
    BlockedFields,
    FieldDefinition,
    FieldsContainer,
    ObjectType,
    object_type_from_model,
    visible_dict,
)


class User(BaseModel):
    """Model exposed as the "User" type"""

    id: str
    firstName: str = Field(description="Given name")
    lastName: str
    password: str
    tags: List[str] = Field(default_factory=list)
    nickname: Optional[str] = None


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    total: int


class Address(BaseModel):
    street: str
    secret: str


class Customer(BaseModel):
    id: str
    address: Address
    previous: List[Address] = Field(default_factory=list)
    by_label: Dict[str, Address] = Field(default_factory=dict)
    pair: Optional[Tuple[Address, Address]] = None


@pytest.fixture
def user():
    return User(
        id="u1",
        firstName="Ada",
        lastName="Lovelace",
        password="hunter2",
        tags=["admin"],
    )


class TestObjectType:
    def test_is_fields_container(self):
        object_type = ObjectType(name="User", field_definitions=(FieldDefinition(name="id"),))
        assert isinstance(object_type, FieldsContainer)

    def test_lookup(self):
        id_field = FieldDefinition(name="id")
        object_type = ObjectType(name="User", field_definitions=(id_field,))

        assert object_type.get_field_definitions() == [id_field]
        assert object_type.get_field_definition("id") == id_field
        assert object_type.get_field_definition("missing") is None

    @pytest.mark.parametrize("bad_name", ["", "1abc", "User.id", "with space", "dash-name"])
    def test_invalid_field_name_rejected(self, bad_name):
        with pytest.raises(ValidationError):
            FieldDefinition(name=bad_name)

    def test_invalid_type_name_rejected(self):
        with pytest.raises(ValidationError):
            ObjectType(name="Bad.Name")

    def test_duplicate_fields_rejected(self):
        with pytest.raises(ValidationError):
            ObjectType(
                name="User",
                field_definitions=(FieldDefinition(name="id"), FieldDefinition(name="id")),
            )

    def test_frozen(self):
        object_type = ObjectType(name="User")
        with pytest.raises(ValidationError):
            object_type.name = "Other"


class TestModelHelpers:
    def test_object_type_from_model(self):
        object_type = object_type_from_model(User)

        assert object_type.name == "User"
        assert [fd.name for fd in object_type.field_definitions] == [
            "id",
            "firstName",
            "lastName",
            "password",
            "tags",
            "nickname",
        ]
        first_name = object_type.get_field_definition("firstName")
        assert first_name.description == "Given name"
        assert first_name.type_name == "str"

    def test_object_type_name_override(self):
        assert object_type_from_model(User, name="Account").name == "Account"

    def test_visible_dict_hides_blocked_fields(self, user):
        visibility = (
            BlockedFields.new_block()
            .add_patterns([r"User\.password", r"User\.last.*"])
            .build()
        )
        data = visible_dict(user, visibility)

        assert data == {
            "id": "u1",
            "firstName": "Ada",
            "tags": ["admin"],
            "nickname": None,
        }

    def test_visible_dict_uses_type_name_override(self, user):
        visibility = BlockedFields.new_block().add_pattern(r"Account\..*").build()

        assert visible_dict(user, visibility, name="Account") == {}
        assert visible_dict(user, visibility) == user.model_dump()

    def test_visible_dict_default_visibility(self, user):
        assert visible_dict(user, DEFAULT_FIELD_VISIBILITY) == user.model_dump()

    def test_generic_model_uses_unparametrized_name(self):
        assert object_type_from_model(Page[int]).name == "Page"

        visibility = BlockedFields.new_block().add_pattern(r"Page\.total").build()
        assert visible_dict(Page[int](items=[1, 2], total=2), visibility) == {
            "items": [1, 2]
        }

    def test_nested_models_filtered_by_their_own_type(self):
        home = Address(street="1 Main St", secret="gate code")
        work = Address(street="2 Side St", secret="badge")
        customer = Customer(
            id="c1",
            address=home,
            previous=[work],
            by_label={"work": work},
            pair=(home, work),
        )
        visibility = BlockedFields.new_block().add_pattern(r"Address\.secret").build()

        assert visible_dict(customer, visibility) == {
            "id": "c1",
            "address": {"street": "1 Main St"},
            "previous": [{"street": "2 Side St"}],
            "by_label": {"work": {"street": "2 Side St"}},
            "pair": ({"street": "1 Main St"}, {"street": "2 Side St"}),
        }

    def test_nested_generic_items_filtered(self):
        page = Page[Address](items=[Address(street="s", secret="x")], total=1)
        visibility = BlockedFields.new_block().add_pattern(r"Address\.secret").build()

        assert visible_dict(page, visibility) == {"items": [{"street": "s"}], "total": 1}
