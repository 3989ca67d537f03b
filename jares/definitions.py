"""
    definitions: declarations of jsonapi attributes, meta attributes and relationships

    Resource classes declare their fields with these helpers, for example:

    class PostResource(Resource):
        model = Post
        attributes = ("title", attribute("excerpt", lambda res: res.object.content[:20]))
        meta_attributes = ("created_at",)
        relationships = (has_one("user"), has_many("comments"), has_many("tags", resource="TagResource"))
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from .errors import ResourceDefinitionError


@dataclass(frozen=True)
class AttributeDefinition:
    """
    A jsonapi attribute:
    - func: serialization function passed inline, called with the resource instance
    - block: serialization function passed as an option, used when there's no func
    - attr: name of the domain object field, when it differs from the attribute name
    """

    name: str
    func: Optional[Callable[[Any], Any]] = None
    block: Optional[Callable[[Any], Any]] = None
    attr: Optional[str] = None

    @property
    def override(self) -> Optional[Callable[[Any], Any]]:
        return self.func or self.block

    @property
    def field_name(self) -> str:
        return self.attr or self.name


@dataclass(frozen=True)
class MetaAttributeDefinition(AttributeDefinition):
    """
    An attribute that is serialized in the resource "meta" instead of the "attributes"
    """


@dataclass(frozen=True)
class RelationshipDefinition:
    """
    :param name: relationship name, as exposed in the include paths
    :param to_many: True for to-many, False for to-one, None to infer it from the model or the value
    :param resource: resource class (or its name) used for the related objects,
                     this takes precedence over the runtime type of the related objects
    :param attr: name of the domain object accessor, when it differs from the relationship name
    """

    name: str
    to_many: Optional[bool] = None
    resource: Optional[Union[type, str]] = None
    attr: Optional[str] = None

    @property
    def accessor(self) -> str:
        return self.attr or self.name


def attribute(name: str, func: Optional[Callable] = None, block: Optional[Callable] = None, attr: Optional[str] = None) -> AttributeDefinition:
    """
    :param name: attribute name
    :param func: function computing the value from the resource instance
    :param block: same as func, takes a lower precedence
    :param attr: domain object field to read
    :return: AttributeDefinition
    """
    return AttributeDefinition(name, func=func, block=block, attr=attr)


def meta_attribute(name: str, func: Optional[Callable] = None, block: Optional[Callable] = None, attr: Optional[str] = None) -> MetaAttributeDefinition:
    """
    :return: MetaAttributeDefinition, cfr. `attribute`
    """
    return MetaAttributeDefinition(name, func=func, block=block, attr=attr)


def relationship(name: str, resource: Optional[Union[type, str]] = None, attr: Optional[str] = None, to_many: Optional[bool] = None) -> RelationshipDefinition:
    """
    Relationship with cardinality inferred from the model mapper or the related value
    """
    return RelationshipDefinition(name, to_many=to_many, resource=resource, attr=attr)


def has_many(name: str, resource: Optional[Union[type, str]] = None, attr: Optional[str] = None) -> RelationshipDefinition:
    return RelationshipDefinition(name, to_many=True, resource=resource, attr=attr)


def has_one(name: str, resource: Optional[Union[type, str]] = None, attr: Optional[str] = None) -> RelationshipDefinition:
    return RelationshipDefinition(name, to_many=False, resource=resource, attr=attr)


def to_definition(declaration: Any, definition_class: type) -> Any:
    """
    Convert a class body declaration to a definition
    :param declaration: string or definition instance
    :param definition_class: expected definition class
    :return: definition_class instance
    """
    if isinstance(declaration, str):
        return definition_class(declaration)
    if type(declaration) is definition_class:
        return declaration
    if definition_class is MetaAttributeDefinition and type(declaration) is AttributeDefinition:
        # attribute("x", ...) used in the meta_attributes declaration
        return MetaAttributeDefinition(declaration.name, declaration.func, declaration.block, declaration.attr)
    raise ResourceDefinitionError(f"Invalid {definition_class.__name__} declaration: {declaration!r}")
