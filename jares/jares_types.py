# Identity and relationship value helpers for domain objects
# Domain objects may be plain python objects or SQLAlchemy mapped instances
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.orm import Query

PK_DELIMITER = "_"

# iterables that are values rather than collections of domain objects
SCALAR_ITERABLE_TYPES = (str, bytes, bytearray, Mapping)


def get_jsonapi_id(obj: Any, delimiter: str = PK_DELIMITER) -> str:
    """
    Create a jsonapi "id" for obj
    In case of a composite PK, the pks are joined with the delimiter
    eg.
    pkA = 1, pkB = 2, delimiter = '_' => jsonapi_id = '1_2'

    Objects that aren't mapped by SQLAlchemy should have an "id" attribute
    (an AttributeError is raised otherwise)

    The id has to be of type string according to the jsonapi json validation schema
    """
    state = sqla_inspect(obj, raiseerr=False)
    mapper = getattr(state, "mapper", None)
    if mapper is None:
        return str(obj.id)
    values = mapper.primary_key_from_instance(obj)
    return delimiter.join(str(value) for value in values)


def is_collection(value: Any) -> bool:
    """
    :return: True if value holds several domain objects: any iterable (lists, sets, generators,
             queries, association proxies, sqla results, ..) except strings and mappings
    """
    return isinstance(value, Iterable) and not isinstance(value, SCALAR_ITERABLE_TYPES)


def infer_to_many(model: Optional[type], accessor: str) -> Optional[bool]:
    """
    Use the SQLAlchemy mapper of the model to determine the relationship cardinality
    :param model: domain class
    :param accessor: relationship attribute name
    :return: True for to-many (uselist), False for to-one, None if unknown
    """
    if model is None:
        return None
    mapper = sqla_inspect(model, raiseerr=False)
    relationships = getattr(mapper, "relationships", None)
    if relationships is None or accessor not in relationships:
        return None
    return bool(relationships[accessor].uselist)


def related_objects(value: Any, to_many: Optional[bool]) -> List[Any]:
    """
    Normalize a relationship value to a list of domain objects
    :param value: value returned by the relationship accessor
    :param to_many: relationship cardinality, None if it should be derived from the value
    :return: list of related objects (at most one for to-one relationships)
    """
    if value is None:
        return []
    if to_many is None:
        to_many = is_collection(value)
    if not to_many:
        return [value]
    if isinstance(value, Query):
        # lazy="dynamic" relationships
        value = value.all()
    return [item for item in value if item is not None]
