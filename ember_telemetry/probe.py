"""
In-page probe and the host-side decoding of its result.

PROBE_SCRIPT runs inside the page with no access to host state. It walks
window.require.entries, resolves every module that exposes default.proto and
reduces its Ember.meta container to plain JSON. Everything else (skip list
bookkeeping, classification, record building) happens on the host.
"""

from typing import Any, Dict, List, Optional

from .metadata import MetaContainer, PropertyDescriptor

ERROR_CHANNEL = "logErrorInNodeProcess"

# NOTE: nothing inside the script may reference anything outside of it;
#       its only input is the JSON argument passed to page.evaluate.
PROBE_SCRIPT = r"""({ skip, types, channel }) => {
    /* globals window */
    const report = message => {
        const send = window[channel];
        if (typeof send === 'function') {
            Promise.resolve(send(message)).catch(() => {});
        }
    };

    const describe = meta => {
        if (!meta || !meta.source) {
            return { source: null, descriptors: [] };
        }
        const { source } = meta;
        const Ember = window.Ember;
        const instanceOf = types.filter(type => Ember[type] && source instanceof Ember[type]);

        const descriptors = [];
        meta.forEachDescriptors((name, desc) => {
            const descProto = Object.getPrototypeOf(desc) || {};
            descriptors.push({
                name,
                enumerable: !!desc.enumerable,
                constructorName: descProto.constructor ? descProto.constructor.name : '',
            });
        });

        return {
            source: {
                properties: Object.keys(source),
                actions: source.actions ? Object.keys(source.actions) : null,
                instanceOf,
            },
            descriptors,
        };
    };

    const paths = Object.keys(window.require.entries);
    const modules = {};

    for (const modulePath of paths) {
        if (skip.includes(modulePath)) {
            continue;
        }
        try {
            const module = window.require(modulePath);
            if (module && module.default && typeof module.default.proto === 'function') {
                modules[modulePath] = describe(window.Ember.meta(module.default.proto()));
            }
        } catch (error) {
            report(`error evaluating \`${modulePath}\`: ${error && error.message}`);
        }
    }

    return { paths, modules };
}"""


class ProbeFormatError(ValueError):
    pass


class ProbedObject(dict):
    """Own enumerable property names of an in-page object.

    Values are not transferred; ``actions`` maps action names to None when
    the object exposes an actions hash.
    """

    def __init__(self, properties=(), actions=None, instance_of=()):
        super().__init__((name, None) for name in properties)
        if actions is not None:
            self["actions"] = {name: None for name in actions}
        elif "actions" in self:
            self["actions"] = None
        self.instance_of = frozenset(instance_of)


def _string_list(value: Any, what: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ProbeFormatError(f"{what} must be a list of strings")
    return value


def decode_meta(payload: Any) -> MetaContainer:
    if not isinstance(payload, dict):
        raise ProbeFormatError("module payload must be an object")

    source = payload.get("source")
    if source is None:
        return MetaContainer()
    if not isinstance(source, dict):
        raise ProbeFormatError("source must be an object")

    actions = source.get("actions")
    obj = ProbedObject(
        properties=_string_list(source.get("properties", []), "properties"),
        actions=_string_list(actions, "actions") if actions is not None else None,
        instance_of=_string_list(source.get("instanceOf", []), "instanceOf"),
    )

    descriptors = []
    for raw in payload.get("descriptors") or []:
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            raise ProbeFormatError("descriptor entries need a name")
        descriptors.append(
            PropertyDescriptor(
                name=raw["name"],
                enumerable=bool(raw.get("enumerable")),
                constructor_name=raw.get("constructorName") or "",
                computed=raw.get("computed"),
            )
        )
    return MetaContainer(source=obj, descriptors=descriptors)


class ProbeBatch:
    def __init__(self, payload: Any):
        if not isinstance(payload, dict):
            raise ProbeFormatError("probe result must be an object")
        self.paths = _string_list(payload.get("paths"), "paths")
        modules = payload.get("modules")
        if not isinstance(modules, dict):
            raise ProbeFormatError("modules must be an object")
        self.modules: Dict[str, Any] = modules

    def resolve(self, path: str) -> Optional[MetaContainer]:
        if path not in self.modules:
            return None
        return decode_meta(self.modules[path])
