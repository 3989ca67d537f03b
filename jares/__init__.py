# flake8: noqa: F401
#
# jares: JSON:API documents for python domain objects and SQLAlchemy models
#
from .jares_init import JARES, log
from .errors import JsonapiError, InvalidMetaResult, ResourceDefinitionError, UnknownResourceError
from .json_encoder import JaresJSONProvider, JaresJSONEncoder
from .definitions import attribute, meta_attribute, relationship, has_one, has_many
from .definitions import AttributeDefinition, MetaAttributeDefinition, RelationshipDefinition
from .registry import TypeRegistry, resource_registry
from .base import Resource, ResourceDescriptor
from .serializer import InclusionResolver, IncludeSet, serialize
from .jsonapi_formatting import jsonapi_format_response, parse_include_paths
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "JARES",
    "log",
    # resources:
    "Resource",
    "ResourceDescriptor",
    "attribute",
    "meta_attribute",
    "relationship",
    "has_one",
    "has_many",
    "AttributeDefinition",
    "MetaAttributeDefinition",
    "RelationshipDefinition",
    "TypeRegistry",
    "resource_registry",
    # serialization:
    "InclusionResolver",
    "IncludeSet",
    "serialize",
    "jsonapi_format_response",
    "parse_include_paths",
    "JaresJSONProvider",
    "JaresJSONEncoder",
    # Errors:
    "JsonapiError",
    "InvalidMetaResult",
    "ResourceDefinitionError",
    "UnknownResourceError",
)
