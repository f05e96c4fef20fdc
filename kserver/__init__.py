"""kserver - Option resolution for the Kotlin server code generator.

Given a target library and a set of feature flags, kserver decides which
supporting files a Kotlin server project needs, where each one is written,
and which flags the selected library actually honors. The result feeds a
template renderer; kserver itself renders and writes nothing.

Quick Start:
    >>> from kserver import ConfigResolver
    >>>
    >>> resolution = ConfigResolver().resolve({
    ...     'library': 'ktor',
    ...     'packageName': 'com.example.server',
    ...     'featureCORS': 'true',
    ... })
    >>> for entry in resolution.plan:
    ...     print(entry.template, '->', entry.path)

CLI Usage:
    $ kserver plan --library jaxrs-spec -o interfaceOnly=true
    $ kserver options
"""

from kserver._version import version as __version__
from kserver.config import GeneratorConfig, get_config
from kserver.constants import GENERATOR_INFO, SUPPORT_MATRIX, FeatureFlag, Library
from kserver.exceptions import ConfigurationError, KServerError, OptionSyntaxError
from kserver.resolve import (
    ArtifactPlanEntry,
    ConfigResolver,
    Configuration,
    Diagnostic,
    DiagnosticLevel,
    Resolution,
)

__all__ = [
    '__version__',
    # Main classes
    'ConfigResolver',
    'Resolution',
    'Configuration',
    'ArtifactPlanEntry',
    'Diagnostic',
    'DiagnosticLevel',
    # Static tables
    'Library',
    'FeatureFlag',
    'SUPPORT_MATRIX',
    'GENERATOR_INFO',
    # Configuration
    'GeneratorConfig',
    'get_config',
    # Exceptions
    'KServerError',
    'ConfigurationError',
    'OptionSyntaxError',
]
