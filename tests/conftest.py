import pytest

from ember_telemetry.classifier import ReflectionClassifier
from ember_telemetry.metadata import MetaContainer, PropertyDescriptor


class EmberObject:
    def __init__(self, **props):
        for name, value in props.items():
            setattr(self, name, value)


class Route(EmberObject):
    pass


class Component(EmberObject):
    pass


class Service(EmberObject):
    pass


class RoutableComponent(Route, Component):
    pass


class ComputedProperty:
    def __init__(self, enumerable=True):
        self.enumerable = enumerable


class PlainDescriptor:
    def __init__(self, enumerable=True):
        self.enumerable = enumerable


def instance_checks():
    return {
        "Route": lambda obj: isinstance(obj, Route),
        "Component": lambda obj: isinstance(obj, Component),
        "Service": lambda obj: isinstance(obj, Service),
    }


@pytest.fixture
def classifier():
    return ReflectionClassifier(instance_checks())


def container(source, *descriptors):
    return MetaContainer(source=source, descriptors=list(descriptors))


def computed(name, enumerable=True):
    return PropertyDescriptor(name, enumerable=enumerable, constructor_name="ComputedProperty")


def plain(name, enumerable=True):
    return PropertyDescriptor(name, enumerable=enumerable, constructor_name="Object")
