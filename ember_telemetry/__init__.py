"""Runtime telemetry for Ember applications."""

from .classifier import FALLBACK_TYPE, TYPE_TAXONOMY, ReflectionClassifier
from .metadata import MetaContainer, MetadataParser, PropertyDescriptor, parse_meta
from .walker import SKIPPED_MODULES, DiagnosticSink, ModuleWalker
from .extractor import TelemetryExtractor, extract_snapshot
from .cache import DiskCache

__all__ = [
    "FALLBACK_TYPE",
    "TYPE_TAXONOMY",
    "ReflectionClassifier",
    "MetaContainer",
    "MetadataParser",
    "PropertyDescriptor",
    "parse_meta",
    "SKIPPED_MODULES",
    "DiagnosticSink",
    "ModuleWalker",
    "TelemetryExtractor",
    "extract_snapshot",
    "DiskCache",
]

__version__ = "0.1.0"
