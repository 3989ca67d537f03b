#
import re
import inflect
from typing import Callable, Optional, Union

_inflect = inflect.engine()

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class ClassPropertyDescriptor:
    """
    ClassPropertyDescriptor
    """

    def __init__(self, fget: classmethod, fset: None = None) -> None:
        self.fget = fget
        self.fset = fset

    def __get__(self, obj, klass=None):
        """
        __get__
        """
        if klass is None:
            klass = type(obj)
        return self.fget.__get__(obj, klass)()


def classproperty(func: Callable) -> ClassPropertyDescriptor:
    """
    classproperty
    """
    if not isinstance(func, (classmethod, staticmethod)):
        func = classmethod(func)

    return ClassPropertyDescriptor(func)


def underscore(name: str) -> str:
    """
    VehicleDriver, vehicle-driver, vehicleDriver => vehicle_driver
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def dasherize(name: str) -> str:
    """
    vehicle_driver => vehicle-driver
    """
    return underscore(name).replace("_", "-")


def camelize(name: str) -> str:
    """
    vehicle_driver => vehicleDriver
    """
    first, *rest = underscore(name).split("_")
    return first + "".join(word.capitalize() for word in rest)


KEY_TRANSFORMS = {"underscore": underscore, "dasherize": dasherize, "camelize": camelize}


def get_key_transform(key_transform: Optional[Union[str, Callable[[str], str]]]) -> Optional[Callable[[str], str]]:
    """
    :param key_transform: name of a builtin transform, a callable or None
    :return: callable applied to attribute and meta keys, None to leave them untouched
    """
    if key_transform is None or callable(key_transform):
        return key_transform
    try:
        return KEY_TRANSFORMS[key_transform]
    except KeyError:
        raise ValueError(f"Unknown key transform '{key_transform}', use one of {', '.join(KEY_TRANSFORMS)}")


def pluralize(name: str) -> str:
    """
    Pluralize the last word of an underscored name:
    car => cars, vehicle_driver => vehicle_drivers, person => people
    """
    *head, last = name.split("_")
    plural = _inflect.plural_noun(last) or last
    return "_".join(head + [plural])


def infer_type_name(class_name: str) -> str:
    """
    :param class_name: name of the domain class (or the resource class without "Resource" suffix)
    :return: the pluralized, underscored jsonapi type
    """
    return pluralize(underscore(class_name))
