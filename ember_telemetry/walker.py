"""
Module walker.

Visits the module registry in order, resolves each module to its meta
container and records the parsed telemetry under the module path. A module
that fails is reported and left out; it never stops the walk.
"""

import sys
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .metadata import MetaContainer, MetadataParser

SKIPPED_MODULES = (
    "fetch/ajax",
    "ember-percy",
    "ember-percy/index",
    "ember-percy/finalize",
    "ember-percy/snapshot",
)

Resolver = Callable[[str], Optional[MetaContainer]]


class DiagnosticSink:
    """One-way error channel. Registered in the page as logErrorInNodeProcess."""

    def __init__(self, stream=None, echo: bool = True):
        self.stream = stream
        self.echo = echo
        self.messages: List[str] = []

    def report(self, message: Any) -> None:
        text = str(message)
        self.messages.append(text)
        if self.echo:
            print(text, file=self.stream or sys.stderr)

    __call__ = report


class ModuleWalker:
    def __init__(
        self,
        resolve: Resolver,
        parser: Optional[MetadataParser] = None,
        report_error: Optional[Callable[[str], None]] = None,
        skip_list: Iterable[str] = SKIPPED_MODULES,
    ):
        self.resolve = resolve
        self.parser = parser or MetadataParser()
        self.report_error = report_error or DiagnosticSink()
        self.skip_list = frozenset(skip_list)

    def visitable(self, paths: Iterable[str]) -> Iterator[str]:
        for path in paths:
            if path not in self.skip_list:
                yield path

    def walk(self, paths: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        telemetry: Dict[str, Dict[str, Any]] = {}
        for path in self.visitable(paths):
            try:
                meta = self.resolve(path)
                if meta is None:
                    # no default.proto export, not a framework object
                    continue
                telemetry[path] = self.parser.parse(meta)
            except Exception as e:
                self.report_error(f"error evaluating `{path}`: {e}")
        return telemetry
