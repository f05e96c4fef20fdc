"""Config resolver tying the resolution stages together.

Runs option normalization, the library compatibility check and artifact plan
assembly in sequence, collecting the diagnostics of each stage.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from kserver.constants import LIST_TYPE, MODEL_MUTABLE, MUTABLE_LIST_TYPE
from kserver.resolve.compatibility import check_compatibility
from kserver.resolve.options import normalize_options
from kserver.resolve.plan import ArtifactPlanEntry, assemble_plan
from kserver.resolve.types import Configuration, Diagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Everything the rendering stage needs from one resolver run.

    Attributes:
        configuration: The normalized and checked configuration.
        plan: Supporting files to render, in rendering order.
        diagnostics: Anomalies noticed along the way, in detection order.
        type_mappings: Schema type to Kotlin type overrides.
    """

    configuration: Configuration
    plan: tuple[ArtifactPlanEntry, ...]
    diagnostics: tuple[Diagnostic, ...] = ()
    type_mappings: dict[str, str] = field(default_factory=dict)

    def template_context(self) -> dict[str, Any]:
        return self.configuration.template_context()

    def to_dict(self) -> dict[str, Any]:
        """Plain data view, suitable for JSON output."""
        return {
            'plan': [
                {
                    'template': entry.template,
                    'directory': entry.directory,
                    'filename': entry.filename,
                    'path': entry.path,
                }
                for entry in self.plan
            ],
            'context': self.template_context(),
            'type_mappings': dict(self.type_mappings),
            'diagnostics': [
                {
                    'level': diagnostic.level.value,
                    'code': diagnostic.code,
                    'message': diagnostic.message,
                    'option': diagnostic.option,
                }
                for diagnostic in self.diagnostics
            ],
        }


def resolve_type_mappings(configuration: Configuration) -> dict[str, str]:
    """Type mapping overrides implied by the configuration."""
    if configuration.is_enabled(MODEL_MUTABLE):
        return {'array': MUTABLE_LIST_TYPE}
    return {'array': LIST_TYPE}


class ConfigResolver:
    """Resolves raw generator options into a configuration and artifact plan.

    The resolver holds no state between runs; each call works on its own
    snapshots, so one instance can serve any number of runs.

    Example:
        >>> resolver = ConfigResolver()
        >>> resolution = resolver.resolve({'library': 'jaxrs-spec'})
        >>> [entry.filename for entry in resolution.plan]
        ['README.md', 'build.gradle', 'settings.gradle', 'gradle.properties']
    """

    def resolve(self, raw: Mapping[str, Any] | None = None) -> Resolution:
        """Resolve a raw option map.

        Args:
            raw: Option key to raw value. Missing options take their defaults.

        Returns:
            The resolution. This never raises for bad option values; those
            are reported through ``Resolution.diagnostics``.
        """
        normalized = normalize_options(raw or {})
        checked = check_compatibility(normalized.configuration)
        configuration = checked.configuration

        plan = assemble_plan(configuration)
        logger.debug(
            f'Resolved {len(plan)} supporting files for library {configuration.library.value}'
        )

        return Resolution(
            configuration=configuration,
            plan=plan,
            diagnostics=normalized.diagnostics + checked.diagnostics,
            type_mappings=resolve_type_mappings(configuration),
        )
