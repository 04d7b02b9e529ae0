"""
Metadata parser.

Turns an Ember meta container into a telemetry record:

    {
        "computedProperties": [...],
        "ownActions": [...],
        "ownProperties": [...],
        "type": "Route",
    }

A container without a source yields an empty record.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .classifier import ReflectionClassifier

RESERVED_PROPERTIES = ("_super", "actions")
COMPUTED_PROPERTY_CONSTRUCTOR = "ComputedProperty"


@dataclass
class PropertyDescriptor:
    name: str
    enumerable: bool = True
    constructor_name: str = ""
    computed: Optional[bool] = None

    @property
    def is_computed(self) -> bool:
        if self.computed is not None:
            return self.computed
        return self.constructor_name == COMPUTED_PROPERTY_CONSTRUCTOR


@dataclass
class MetaContainer:
    source: Any = None
    descriptors: List[PropertyDescriptor] = field(default_factory=list)

    def for_each_descriptor(self, callback: Callable[[str, PropertyDescriptor], None]) -> None:
        for desc in self.descriptors:
            callback(desc.name, desc)


def own_keys(obj: Any) -> List[str]:
    if obj is None:
        return []
    if isinstance(obj, Mapping):
        return list(obj.keys())
    return list(vars(obj).keys())


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def descriptor_is_computed(desc: Any) -> bool:
    flag = getattr(desc, "is_computed", None)
    if isinstance(flag, bool):
        return flag
    proto = type(desc)
    return getattr(proto, "__name__", "") == COMPUTED_PROPERTY_CONSTRUCTOR


class MetadataParser:
    def __init__(self, classifier: Optional[ReflectionClassifier] = None):
        self.classifier = classifier or ReflectionClassifier()

    def parse(self, meta: Optional[MetaContainer] = None) -> Dict[str, Any]:
        if not meta or getattr(meta, "source", None) is None:
            return {}
        source = meta.source
        type_name = self.classifier.classify(source)

        own_properties = [key for key in own_keys(source) if key not in RESERVED_PROPERTIES]

        actions = _lookup(source, "actions")
        own_actions = own_keys(actions) if actions else []

        computed_properties: List[str] = []

        def visit(name: str, desc: Any) -> None:
            if (
                getattr(desc, "enumerable", False)
                and name in own_properties
                and descriptor_is_computed(desc)
            ):
                computed_properties.append(name)

        meta.for_each_descriptor(visit)

        return {
            "computedProperties": computed_properties,
            "ownActions": own_actions,
            "ownProperties": own_properties,
            "type": type_name,
        }


def parse_meta(meta: Optional[MetaContainer] = None, classifier: Optional[ReflectionClassifier] = None) -> Dict[str, Any]:
    return MetadataParser(classifier).parse(meta)
