"""
Reflection classifier.

Maps a framework object onto one of the Ember abstractions it is an
instance of. The type registry is injected as name -> predicate so the
taxonomy can be exercised without a browser.
"""

from typing import Any, Callable, Dict, Mapping, Optional

TYPE_TAXONOMY = (
    "Application",
    "Controller",
    "Helper",
    "Route",
    "Component",
    "Service",
    "Router",
    "Engine",
)

FALLBACK_TYPE = "EmberObject"

TypeCheck = Callable[[Any], bool]


def probed_type_checks() -> Dict[str, TypeCheck]:
    """Predicates for objects decoded from the page (see probe.ProbedObject)."""
    checks: Dict[str, TypeCheck] = {}
    for type_name in TYPE_TAXONOMY:
        checks[type_name] = lambda obj, name=type_name: name in getattr(obj, "instance_of", ())
    return checks


class ReflectionClassifier:
    def __init__(self, checks: Optional[Mapping[str, TypeCheck]] = None):
        self.checks = dict(checks) if checks is not None else probed_type_checks()

    def classify(self, obj: Any) -> str:
        # First match wins: a Route subclass may also pass later checks.
        for type_name in TYPE_TAXONOMY:
            check = self.checks.get(type_name)
            if check and check(obj):
                return type_name
        return FALLBACK_TYPE
