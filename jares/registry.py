"""
    registry: lookup of the resource class for a domain object

    Resource classes that declare a `model` are registered when the class is created.
    Related objects are looked up by their exact runtime type: a `Car` instance
    doesn't resolve to the `VehicleResource` when no `CarResource` is registered.
"""

from typing import Any, Dict, Iterator, Optional, Union
import jares


class TypeRegistry:
    """
    Maps domain classes to resource classes
    """

    def __init__(self) -> None:
        self._by_model: Dict[type, type] = {}
        self._by_name: Dict[str, type] = {}

    def register(self, resource_class: type, model: Optional[type] = None) -> type:
        """
        :param resource_class: Resource subclass
        :param model: domain class, defaults to the `model` of the resource class
        :return: resource_class, so this can be used as a class decorator
        """
        model = model if model is not None else resource_class.model
        if model is None:
            raise ValueError(f"{resource_class.__name__} has no model to register")
        previous = self._by_model.get(model)
        if previous is not None and previous is not resource_class:
            jares.log.warning(f"{model.__name__} was registered for {previous.__name__}, now using {resource_class.__name__}")
        self._by_model[model] = resource_class
        self._by_name[resource_class.__name__] = resource_class
        self._register_type_name(resource_class)
        return resource_class

    def _register_type_name(self, resource_class: type) -> None:
        """
        A subclass that inherits the type_name of a registered resource (eg. sti subclass resources)
        doesn't replace that resource in the name lookup
        """
        type_name = resource_class.jsonapi_type
        previous = self._by_name.get(type_name)
        if previous is None or previous is resource_class:
            self._by_name[type_name] = resource_class
        elif issubclass(resource_class, previous):
            jares.log.debug(f"{resource_class.__name__} shares the type '{type_name}' of {previous.__name__}")
        else:
            jares.log.warning(f"Type '{type_name}' was registered for {previous.__name__}, now using {resource_class.__name__}")
            self._by_name[type_name] = resource_class

    def unregister(self, resource_class: type) -> None:
        self._by_model = {model: res for model, res in self._by_model.items() if res is not resource_class}
        self._by_name = {name: res for name, res in self._by_name.items() if res is not resource_class}

    def clear(self) -> None:
        self._by_model.clear()
        self._by_name.clear()

    def get(self, name: str) -> Optional[type]:
        """
        :param name: resource class name or jsonapi type
        :return: resource class or None
        """
        return self._by_name.get(name)

    def for_model(self, model: type) -> Optional[type]:
        return self._by_model.get(model)

    def resolve(self, obj: Any, override: Optional[Union[type, str]] = None) -> Optional[type]:
        """
        Determine the resource class that serializes obj

        :param obj: domain object
        :param override: explicitly configured resource class (or its name), this always wins
        :return: resource class or None if obj has no registered resource
        """
        if isinstance(override, type):
            return override
        if override is not None:
            resource_class = self.get(override)
            if resource_class is not None:
                return resource_class
            # the named resource may not exist for polymorphic relationships
            jares.log.warning(f"Unknown resource '{override}', resolving {type(obj).__name__} by type")

        resource_class = self._by_model.get(type(obj))
        if resource_class is None:
            jares.log.debug(f"No resource registered for {type(obj).__name__}")
        return resource_class

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        return item in self._by_model or item in self._by_model.values()

    def __len__(self) -> int:
        return len(self._by_model)

    def __iter__(self) -> Iterator[type]:
        return iter(self._by_model.values())


# default registry, used by Resource subclasses unless they specify their own `registry`
resource_registry = TypeRegistry()
