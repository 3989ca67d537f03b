import datetime

import pytest

from jares import (
    InvalidMetaResult,
    Resource,
    ResourceDefinitionError,
    TypeRegistry,
    attribute,
    has_many,
    has_one,
    meta_attribute,
    relationship,
)


class Person:
    def __init__(self, id, name, email="", created_at=None, friends=None, best_friend=None):
        self.id = id
        self.name = name
        self.email = email
        self.created_at = created_at
        self.friends = friends if friends is not None else []
        self.best_friend = best_friend


class Employee(Person):
    def __init__(self, *args, salary=0, **kwargs):
        super().__init__(*args, **kwargs)
        self.salary = salary


local_registry = TypeRegistry()


class BaseResource(Resource):
    registry = local_registry


class PersonResource(BaseResource):
    model = Person
    attributes = ("name", "email")
    meta_attributes = ("created_at",)
    relationships = (has_many("friends"), has_one("best_friend"))


class EmployeeResource(PersonResource):
    model = Employee
    attributes = ("salary",)


@pytest.fixture
def person() -> Person:
    return Person(7, "John Doe", "john@example.com", created_at=datetime.datetime(2024, 1, 1, 12, 0, 0))


def test_attributes_default_to_the_object_fields(person: Person) -> None:
    resource = PersonResource(person)

    assert resource.to_dict() == {"name": person.name, "email": person.email}
    assert resource.jsonapi_id == "7"
    assert resource.jsonapi_type == "people"


def test_type_inference() -> None:
    class CarResource(Resource):
        pass

    class VehicleDriverResource(Resource):
        pass

    class Thing(Resource):
        type_name = "custom_things"

    assert CarResource.jsonapi_type == "cars"
    assert VehicleDriverResource.jsonapi_type == "vehicle_drivers"
    assert Thing.jsonapi_type == "custom_things"
    assert EmployeeResource.jsonapi_type == "employees"


def test_attribute_precedence(person: Person) -> None:
    class PrecedenceResource(Resource):
        model = Person
        registry = None
        attributes = (
            attribute("name", lambda res: "func", block=lambda res: "block"),
            attribute("email", block=lambda res: "block"),
            "created_at",
            attribute("display_name", attr="name"),
        )

        def name(self):
            return "method"

        def email(self):
            return "method"

        def created_at(self):
            return "method"

    assert PrecedenceResource(person).to_dict() == {
        "name": "func",
        "email": "block",
        "created_at": "method",
        "display_name": "John Doe",
    }


def test_functions_receive_the_resource_instance(person: Person) -> None:
    class ContextResource(Resource):
        model = Person
        registry = None
        attributes = (attribute("greeting", lambda res: f"{res.context['greeting']} {res.object.name}"),)

    resource = ContextResource(person, {"greeting": "Hello"})

    assert resource.to_dict() == {"greeting": "Hello John Doe"}


def test_method_defined_after_the_declaration_is_used(person: Person) -> None:
    class LateResource(Resource):
        model = Person
        registry = None
        attributes = ("name",)

    assert LateResource(person).to_dict()["name"] == "John Doe"

    LateResource.name = lambda self: self.object.name.upper()

    assert LateResource(person).to_dict()["name"] == "JOHN DOE"


def test_subclass_method_overrides_inherited_attribute(person: Person) -> None:
    class ShoutingResource(PersonResource):
        registry = None

        @property
        def email(self):
            return self.object.email.upper()

    assert ShoutingResource(person).to_dict()["email"] == "JOHN@EXAMPLE.COM"
    assert PersonResource(person).to_dict()["email"] == "john@example.com"


def test_missing_field_is_propagated() -> None:
    class BrokenResource(Resource):
        registry = None
        attributes = ("nickname",)

    with pytest.raises(AttributeError):
        BrokenResource(Person(1, "x")).to_dict()


def test_inherited_declarations_are_extended() -> None:
    descriptor = EmployeeResource.descriptor

    assert list(descriptor.attributes) == ["name", "email", "salary"]
    assert list(descriptor.meta_attributes) == ["created_at"]
    assert list(descriptor.relationships) == ["friends", "best_friend"]
    assert list(PersonResource.descriptor.attributes) == ["name", "email"]


def test_redeclared_attribute_keeps_its_position(person: Person) -> None:
    class RenamedResource(PersonResource):
        registry = None
        attributes = (attribute("name", lambda res: "renamed"),)

    assert list(RenamedResource.descriptor.attributes) == ["name", "email"]
    assert RenamedResource(person).to_dict()["name"] == "renamed"


@pytest.mark.parametrize("name", ["id", "type", "meta", "object", "context"])
def test_reserved_names_are_rejected(name: str) -> None:
    with pytest.raises(ResourceDefinitionError):
        type("ReservedResource", (Resource,), {"registry": None, "attributes": (name,)})


def test_names_are_unique_across_categories() -> None:
    with pytest.raises(ResourceDefinitionError) as exc_info:

        class DuplicateResource(Resource):
            registry = None
            attributes = ("friends",)
            relationships = (has_many("friends"),)

    assert '"friends"' in exc_info.value.message


def test_invalid_declarations_are_rejected() -> None:
    with pytest.raises(ResourceDefinitionError):

        class InvalidResource(Resource):
            registry = None
            relationships = ("friends",)


class TestMeta:
    def test_meta_attributes(self, person: Person) -> None:
        assert PersonResource(person).meta_dict() == {"created_at": person.created_at}

    def test_no_meta(self, person: Person) -> None:
        class PlainResource(Resource):
            registry = None
            attributes = ("name",)

        assert PlainResource(person).meta_dict() == {}

    def test_meta_override_only(self, person: Person) -> None:
        class StandaloneResource(Resource):
            registry = None

            def meta(self):
                return {"standalone_field": "standalone_value"}

        assert StandaloneResource(person).meta_dict() == {"standalone_field": "standalone_value"}

    def test_meta_override_merges_with_super(self, person: Person) -> None:
        class MergingResource(PersonResource):
            registry = None

            def meta(self):
                return {**super().meta(), "user_role": self.context.get("user_role", "guest")}

        assert MergingResource(person, {"user_role": "admin"}).meta_dict() == {
            "created_at": person.created_at,
            "user_role": "admin",
        }

    def test_meta_override_replaces_meta_attribute(self, person: Person) -> None:
        class ReplacingResource(PersonResource):
            registry = None

            def meta(self):
                return {**super().meta(), "created_at": "overridden_value"}

        assert ReplacingResource(person).meta_dict() == {"created_at": "overridden_value"}

    def test_meta_chain_composes_up_the_lineage(self, person: Person) -> None:
        class ParentResource(PersonResource):
            registry = None
            meta_attributes = (meta_attribute("email_domain", lambda res: res.object.email.split("@")[-1]),)

            def meta(self):
                return {**super().meta(), "level": "parent"}

        class ChildResource(ParentResource):
            def meta(self):
                result = super().meta()
                result["level"] = result["level"] + ".child"
                return result

        assert ChildResource(person).meta_dict() == {
            "created_at": person.created_at,
            "email_domain": "example.com",
            "level": "parent.child",
        }

    def test_meta_must_be_a_dict(self, person: Person) -> None:
        class NotAMapResource(Resource):
            registry = None
            type_name = "not_maps"

            def meta(self):
                return "not a map"

        with pytest.raises(InvalidMetaResult) as exc_info:
            NotAMapResource(person).meta_dict()

        assert "NotAMapResource" in exc_info.value.message
        assert "not_maps" in exc_info.value.message

    def test_encode_omits_empty_meta(self, person: Person) -> None:
        class PlainResource(Resource):
            registry = None
            type_name = "people"
            attributes = ("name",)

        assert PlainResource(person).jsonapi_encode() == {"id": "7", "type": "people", "attributes": {"name": "John Doe"}}


class TestRelated:
    def test_to_many(self) -> None:
        friends = [Person(2, "Jane"), None, Person(3, "Joe")]
        resource = PersonResource(Person(1, "John", friends=friends))

        assert [friend.name for friend in resource.related("friends")] == ["Jane", "Joe"]

    def test_to_one(self) -> None:
        jane = Person(2, "Jane")

        assert PersonResource(Person(1, "John", best_friend=jane)).related("best_friend") == [jane]
        assert PersonResource(Person(1, "John")).related("best_friend") == []

    def test_accessor_indirection(self) -> None:
        class AliasResource(Resource):
            registry = None
            relationships = (has_one("buddy", attr="best_friend"),)

        jane = Person(2, "Jane")

        assert AliasResource(Person(1, "John", best_friend=jane)).related("buddy") == [jane]

    def test_resource_method_takes_precedence(self) -> None:
        jane, joe = Person(2, "Jane"), Person(3, "Joe")

        class FilteringResource(Resource):
            registry = None
            relationships = (has_many("friends"),)

            def friends(self):
                return [friend for friend in self.object.friends if friend.name.startswith(self.context["prefix"])]

        resource = FilteringResource(Person(1, "John", friends=[jane, joe]), {"prefix": "Jo"})

        assert resource.related("friends") == [joe]

    def test_cardinality_is_inferred_from_the_value(self) -> None:
        class UntypedResource(Resource):
            registry = None
            relationships = (relationship("friends"), relationship("best_friend"))

        jane, joe = Person(2, "Jane"), Person(3, "Joe")
        resource = UntypedResource(Person(1, "John", friends=(jane, joe), best_friend=jane))

        assert resource.related("friends") == [jane, joe]
        assert resource.related("best_friend") == [jane]

    def test_unknown_relationship(self) -> None:
        with pytest.raises(KeyError):
            PersonResource(Person(1, "John")).related("enemies")
