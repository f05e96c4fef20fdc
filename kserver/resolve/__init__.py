"""Option resolution for the Kotlin server generator.

The pipeline runs in three stages, each producing a fresh snapshot:

    - normalize_options: raw option map -> typed, fully populated Configuration
    - check_compatibility: default the library, reconcile flags with it
    - assemble_plan: ordered list of supporting files to render

ConfigResolver runs all three and returns a Resolution.
"""

from kserver.resolve.compatibility import check_compatibility, supported_options
from kserver.resolve.options import normalize_options, parse_bool, parse_library
from kserver.resolve.plan import (
    ArtifactPlanEntry,
    assemble_plan,
    duplicate_paths,
    effective_plan,
    package_directory,
)
from kserver.resolve.resolver import ConfigResolver, Resolution, resolve_type_mappings
from kserver.resolve.types import (
    Configuration,
    Diagnostic,
    DiagnosticLevel,
    StageResult,
)

__all__ = [
    'ConfigResolver',
    'Resolution',
    'resolve_type_mappings',
    # Stages
    'normalize_options',
    'check_compatibility',
    'assemble_plan',
    # Helpers
    'parse_bool',
    'parse_library',
    'supported_options',
    'package_directory',
    'duplicate_paths',
    'effective_plan',
    # Types
    'ArtifactPlanEntry',
    'Configuration',
    'Diagnostic',
    'DiagnosticLevel',
    'StageResult',
]
