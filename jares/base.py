# base.py: implements the Resource class and the ResourceDescriptor metadata
#
# pylint: disable=line-too-long,protected-access
#
"""
Resource class customizable attributes and methods, override these to customize the serialization.

model:
Type: Optional[type]
Description: Domain class serialized by the resource. Resource classes with a model are
registered in `registry` so related objects of this class can be resolved.


type_name:
Type: Optional[str]
Description: JSON:API "type". If not set, it's inferred from the model name (Car => "cars")
or from the resource class name (CarResource => "cars").


registry:
Type: Optional[TypeRegistry]
Description: Registry where the resource class registers itself, None to disable registration.


attributes:
Type: Sequence[str | AttributeDefinition]
Description: JSON:API attributes, added to the attributes of the parent resource classes.


meta_attributes:
Type: Sequence[str | MetaAttributeDefinition]
Description: Attributes serialized in the resource "meta".


relationships:
Type: Sequence[RelationshipDefinition]
Description: Relationships that can be included, cfr. `has_one`, `has_many` and `relationship`.


meta:
Type: method
Description: Returns the "meta" dict. The default returns the meta attribute values,
overrides can extend it with `super().meta()`.


pk_delimiter:
Type: str
Description: Delimiter used to join composite primary keys in the jsonapi id.
"""
from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

import jares
from .config import get_config
from .definitions import AttributeDefinition, MetaAttributeDefinition, RelationshipDefinition, to_definition
from .errors import InvalidMetaResult, ResourceDefinitionError
from .jares_types import PK_DELIMITER, get_jsonapi_id, infer_to_many, related_objects
from .json_encoder import encode_value
from .registry import resource_registry
from .util import classproperty, get_key_transform, infer_type_name

# Names that can't be used for attributes or relationships:
# "id" and "type" are prohibited by the jsonapi spec (http://jsonapi.org/format/#document-resource-object-fields),
# the others would shadow the Resource members
RESERVED_NAMES = frozenset(
    {
        "id",
        "type",
        "object",
        "context",
        "model",
        "type_name",
        "registry",
        "attributes",
        "meta_attributes",
        "relationships",
        "descriptor",
        "pk_delimiter",
        "jsonapi_id",
        "jsonapi_type",
        "jsonapi_encode",
        "to_dict",
        "meta",
        "meta_dict",
        "related",
    }
)


class ResourceDescriptor:
    """
    The effective attribute, meta attribute and relationship definitions of a resource class,
    i.e. the declarations of the class and all of its parents, in declaration order
    """

    def __init__(
        self,
        resource_class: type,
        attributes: Dict[str, AttributeDefinition],
        meta_attributes: Dict[str, MetaAttributeDefinition],
        relationships: Dict[str, RelationshipDefinition],
    ) -> None:
        self.resource_class = resource_class
        self.attributes = attributes
        self.meta_attributes = meta_attributes
        self.relationships = relationships
        self._validate()

    @classmethod
    def build(cls, resource_class: type) -> ResourceDescriptor:
        """
        Collect the declarations of resource_class and its bases, base classes first.
        A redeclared name replaces the inherited definition but keeps its position.
        """
        attributes: Dict[str, AttributeDefinition] = {}
        meta_attributes: Dict[str, MetaAttributeDefinition] = {}
        relationships: Dict[str, RelationshipDefinition] = {}

        for klass in reversed(resource_class.__mro__):
            for declaration in klass.__dict__.get("attributes", ()):
                definition = to_definition(declaration, AttributeDefinition)
                attributes[definition.name] = definition
            for declaration in klass.__dict__.get("meta_attributes", ()):
                definition = to_definition(declaration, MetaAttributeDefinition)
                meta_attributes[definition.name] = definition
            for declaration in klass.__dict__.get("relationships", ()):
                if not isinstance(declaration, RelationshipDefinition):
                    raise ResourceDefinitionError(f"Invalid relationship declaration in {klass.__name__}: {declaration!r}")
                relationships[declaration.name] = declaration

        return cls(resource_class, attributes, meta_attributes, relationships)

    def _validate(self) -> None:
        class_name = self.resource_class.__name__
        seen: Dict[str, str] = {}
        for category, names in (("attribute", self.attributes), ("meta attribute", self.meta_attributes), ("relationship", self.relationships)):
            for name in names:
                if name in RESERVED_NAMES:
                    raise ResourceDefinitionError(f'{class_name}: "{name}" can\'t be used as {category} name')
                if name in seen:
                    raise ResourceDefinitionError(f'{class_name}: "{name}" is declared as {seen[name]} and {category}')
                seen[name] = category

    def __repr__(self) -> str:
        return (
            f"<ResourceDescriptor {self.resource_class.__name__} attributes={list(self.attributes)} "
            f"meta_attributes={list(self.meta_attributes)} relationships={list(self.relationships)}>"
        )


class Resource:
    """This class implements json:api serialization for a domain object

    Subclasses declare the attributes and relationships, the resulting metadata is kept
    in the class `descriptor`. An instance binds the resource to a single domain object
    and the serialization context (eg. the current user).

    Attribute values are looked up in this order:
    1. the attribute func
    2. the attribute block
    3. a resource member (method or property) with the attribute name
    4. the domain object field
    """

    model: Optional[type] = None
    type_name: Optional[str] = None
    registry = resource_registry
    pk_delimiter = PK_DELIMITER

    attributes = ()
    meta_attributes = ()
    relationships = ()

    descriptor: ResourceDescriptor = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.descriptor = ResourceDescriptor.build(cls)
        if "model" in cls.__dict__ and cls.model is not None and cls.registry is not None:
            cls.registry.register(cls)
        jares.log.debug(f"{cls.descriptor}")

    def __init__(self, obj: Any, context: Optional[dict] = None) -> None:
        """
        :param obj: domain object
        :param context: opaque dict passed to the attribute functions and overrides
        """
        self.object = obj
        self.context = context if context is not None else {}

    @classproperty
    def jsonapi_type(cls) -> str:
        """
        :return: the jsonapi "type"
        """
        if cls.type_name:
            return cls.type_name
        if cls.model is not None:
            return infer_type_name(cls.model.__name__)
        name = cls.__name__
        if name.endswith("Resource") and name != "Resource":
            name = name[: -len("Resource")]
        return infer_type_name(name)

    @property
    def jsonapi_id(self) -> str:
        """
        :return: json:api id
        :rtype: str
        """
        return get_jsonapi_id(self.object, self.pk_delimiter)

    def _get_value(self, definition: AttributeDefinition) -> Any:
        """
        :param definition: attribute or meta attribute definition
        :return: attribute value

        The resource member is looked up when the value is needed, so members defined
        (or replaced) after the declaration are used as well
        """
        override = definition.override
        if override is not None:
            return override(self)
        if hasattr(type(self), definition.name):
            value = getattr(self, definition.name)
            return value() if callable(value) else value
        # AttributeError is propagated: the resource doesn't match the domain object
        return getattr(self.object, definition.field_name)

    def to_dict(self) -> Dict[str, Any]:
        """
        :return: dictionary with the jsonapi attributes
        """
        return {name: self._get_value(definition) for name, definition in self.descriptor.attributes.items()}

    def meta(self) -> Dict[str, Any]:
        """
        :return: dictionary with the meta attributes

        Override this to add custom meta, use `super().meta()` to keep the meta attributes:
            def meta(self):
                return {**super().meta(), "can_edit": self.context.get("user") == self.object.user}
        """
        return {name: self._get_value(definition) for name, definition in self.descriptor.meta_attributes.items()}

    def meta_dict(self) -> Dict[str, Any]:
        """
        :return: the validated result of `meta()`
        """
        result = self.meta()
        if not isinstance(result, Mapping):
            raise InvalidMetaResult(
                f"{type(self).__name__}.meta() (type '{self.jsonapi_type}') should return a dict, got {type(result).__name__}: {result!r}"
            )
        return dict(result)

    def related(self, rel_name: str) -> List[Any]:
        """
        :param rel_name: relationship name
        :return: list of related domain objects (at most one for to-one relationships)

        A resource member with the relationship name takes precedence over the domain object accessor
        """
        relationship = self.descriptor.relationships[rel_name]
        if hasattr(type(self), rel_name):
            value = getattr(self, rel_name)
            if callable(value):
                value = value()
        else:
            value = getattr(self.object, relationship.accessor)

        to_many = relationship.to_many
        if to_many is None:
            to_many = infer_to_many(type(self.object), relationship.accessor)
        return related_objects(value, to_many)

    def jsonapi_encode(self, key_transform: Any = None) -> Dict[str, Any]:
        """
        :param key_transform: transform applied to the attribute and meta keys,
                              defaults to the JSONAPI_KEY_TRANSFORM configuration
        :return: Encoded object according to the jsonapi specification:
        `data = {
                "id": "...",
                "type": "...",
                "attributes": { ... },
                "meta": { ... }
                }`
        "meta" is omitted when empty
        """
        if key_transform is None:
            key_transform = get_config("JSONAPI_KEY_TRANSFORM")
        transform = get_key_transform(key_transform)

        def encode(values):
            return {(transform(key) if transform else key): encode_value(value) for key, value in values.items()}

        data = dict(id=self.jsonapi_id, type=self.jsonapi_type, attributes=encode(self.to_dict()))
        meta = self.meta_dict()
        if meta:
            data["meta"] = encode(meta)
        return data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.jsonapi_type}:{self.object!r}>"


Resource.descriptor = ResourceDescriptor.build(Resource)
