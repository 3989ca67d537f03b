"""
    serializer: create JSON:API documents with the related resources of the primary data

    http://jsonapi.org/format/#fetching-includes

    Inclusion of Related Resources:
    Multiple related resources can be requested in a comma-separated list:
        include=user,comments
    In order to request resources related to other resources,
    a dot-separated path for each relationship name can be specified:
        include=user.posts.tags

    A compound document MUST NOT include more than one resource object
    for each type and id pair.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
from sqlalchemy.orm import Query
import jares
from .base import Resource
from .config import get_config
from .errors import UnknownResourceError
from .jares_types import is_collection
from .jsonapi_formatting import parse_include_paths
from .registry import TypeRegistry, resource_registry


class IncludeSet:
    """
    Encoded included resources, keyed by (type, id)
    The first resource added for a key is kept, insertion order is preserved
    """

    def __init__(self, key_transform: Any = None) -> None:
        self.key_transform = key_transform
        self._items: Dict[Tuple[str, str], dict] = {}

    def add(self, resource: Resource) -> bool:
        """
        :param resource: resource instance to include
        :return: False if a resource with the same type and id was already included
        """
        key = (resource.jsonapi_type, resource.jsonapi_id)
        if key in self._items:
            return False
        self._items[key] = resource.jsonapi_encode(self.key_transform)
        return True

    def merge(self, other: "IncludeSet") -> "IncludeSet":
        """
        Add the items of other that aren't included yet
        (used to combine the results of serializations running in parallel)
        """
        for key, item in other._items.items():
            self._items.setdefault(key, item)
        return self

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def values(self) -> List[dict]:
        return list(self._items.values())


class InclusionResolver:
    """
    Serializes primary data and the resources reachable from it through the include paths

    :param resource_class: resource used for the primary objects,
                           if not set the resource is looked up in the registry
    :param registry: TypeRegistry used for the related objects
    :param key_transform: attribute key transform, cfr. `jares.util.KEY_TRANSFORMS`
    """

    def __init__(self, resource_class: Optional[type] = None, registry: Optional[TypeRegistry] = None, key_transform: Any = None) -> None:
        self.resource_class = resource_class
        if registry is None:
            registry = getattr(resource_class, "registry", None)
        if registry is None:
            registry = resource_registry
        self.registry = registry
        self.key_transform = key_transform

    def serialize(
        self, objects: Any, context: Optional[dict] = None, include: Optional[Union[str, Iterable[str]]] = None
    ) -> Dict[str, Any]:
        """
        :param objects: domain object, Resource instance or a collection of these
        :param context: dict passed to all resource instances
        :param include: include paths, eg. "user.posts,comments" or ["user.posts", "comments"]
        :return: jsonapi document: {"data": ..., "included": [...]}
                 "included" is only present when related resources were found
        """
        if objects is None:
            return dict(data=None)
        context = context if context is not None else {}
        if include is None:
            include = get_config("DEFAULT_INCLUDED")
        key_transform = self.key_transform if self.key_transform is not None else get_config("JSONAPI_KEY_TRANSFORM")

        many = is_collection(objects)
        if isinstance(objects, Query):
            objects = objects.all()
        items = objects if many else [objects]
        resources = [self.wrap(obj, context) for obj in items if obj is not None]

        data = [resource.jsonapi_encode(key_transform) for resource in resources]
        result = dict(data=data if many else (data[0] if data else None))

        included = IncludeSet(key_transform)
        self.include(resources, parse_include_paths(include), included)
        if included:
            result["included"] = included.values()

        return result

    def wrap(self, obj: Any, context: dict) -> Resource:
        """
        :return: primary Resource instance for obj
        """
        if isinstance(obj, Resource):
            return obj
        resource_class = self.resource_class or self.registry.resolve(obj)
        if resource_class is None:
            raise UnknownResourceError(f"No resource registered for {type(obj).__name__}")
        return resource_class(obj, context)

    def include(self, resources: Sequence[Resource], paths: Sequence[Tuple[str, ...]], included: IncludeSet) -> IncludeSet:
        """
        Add the resources reachable through paths to included
        """
        for resource in resources:
            for path in paths:
                self._include_path(resource, path, included)
        return included

    def _include_path(self, resource: Resource, path: Tuple[str, ...], included: IncludeSet) -> None:
        """
        Walk the relationships in path recursively

        Traversal continues for resources that were already included:
        another path may reach them first, without the nested relationships
        The recursion depth is bounded by the length of the path, so cyclic relationships terminate
        """
        if not path:
            return
        rel_name, next_path = path[0], path[1:]
        relationship = resource.descriptor.relationships.get(rel_name)
        if relationship is None:
            jares.log.debug(f"{type(resource).__name__} has no relationship '{rel_name}', skipping include")
            return

        for related_obj in resource.related(rel_name):
            resource_class = self.registry.resolve(related_obj, relationship.resource)
            if resource_class is None:
                # eg. polymorphic relationship with an unexposed type
                continue
            related = resource_class(related_obj, resource.context)
            included.add(related)
            self._include_path(related, next_path, included)


def serialize(
    objects: Any,
    context: Optional[dict] = None,
    include: Optional[Union[str, Iterable[str]]] = None,
    resource_class: Optional[type] = None,
    key_transform: Any = None,
) -> Dict[str, Any]:
    """
    Serialize objects with the resources related through include,
    cfr. `InclusionResolver.serialize`
    """
    return InclusionResolver(resource_class, key_transform=key_transform).serialize(objects, context, include)
