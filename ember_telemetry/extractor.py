"""
Telemetry extractor.

Composes probe, walker and parser. The page is evaluated exactly once; the
snapshot is only handed back after every module has been visited.
"""

from typing import Any, Callable, Dict, Iterable, Optional

from .classifier import TYPE_TAXONOMY, ReflectionClassifier
from .metadata import MetadataParser
from .probe import ERROR_CHANNEL, PROBE_SCRIPT, ProbeBatch
from .walker import SKIPPED_MODULES, DiagnosticSink, ModuleWalker, Resolver

Snapshot = Dict[str, Dict[str, Any]]


class TelemetryExtractor:
    def __init__(
        self,
        classifier: Optional[ReflectionClassifier] = None,
        skip_list: Iterable[str] = SKIPPED_MODULES,
        diagnostics: Optional[Callable[[str], None]] = None,
    ):
        self.parser = MetadataParser(classifier)
        self.skip_list = tuple(skip_list)
        self.diagnostics = diagnostics or DiagnosticSink()

    def probe_argument(self) -> Dict[str, Any]:
        return {
            "skip": list(self.skip_list),
            "types": list(TYPE_TAXONOMY),
            "channel": ERROR_CHANNEL,
        }

    def walker(self, resolve: Resolver) -> ModuleWalker:
        return ModuleWalker(
            resolve,
            parser=self.parser,
            report_error=self.diagnostics,
            skip_list=self.skip_list,
        )

    def extract_from(self, registry_paths: Iterable[str], resolve: Resolver) -> Snapshot:
        return self.walker(resolve).walk(registry_paths)

    async def extract(self, page) -> Snapshot:
        payload = await page.evaluate(PROBE_SCRIPT, self.probe_argument())
        batch = ProbeBatch(payload)
        return self.extract_from(batch.paths, batch.resolve)


def extract_snapshot(
    registry_paths: Iterable[str],
    resolve: Resolver,
    classifier: Optional[ReflectionClassifier] = None,
    skip_list: Iterable[str] = SKIPPED_MODULES,
    diagnostics: Optional[Callable[[str], None]] = None,
) -> Snapshot:
    extractor = TelemetryExtractor(classifier=classifier, skip_list=skip_list, diagnostics=diagnostics)
    return extractor.extract_from(registry_paths, resolve)
