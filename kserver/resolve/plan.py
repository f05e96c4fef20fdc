"""Artifact plan assembly.

Builds the ordered list of supporting files a configuration implies. The
order is part of the contract: the renderer writes files in list order, so
for two entries sharing a path the later one wins.
"""

import os
from dataclasses import dataclass

from kserver.constants import (
    DEFAULT_LIBRARY,
    GENERATE_APIS,
    INFRASTRUCTURE_FOLDER,
    PACKAGE_NAME,
    RESOURCES,
    RESOURCES_FOLDER,
    SOURCE_FOLDER,
    Library,
)
from kserver.resolve.types import Configuration


@dataclass(frozen=True)
class ArtifactPlanEntry:
    """A single supporting file to render.

    Attributes:
        template: Template identifier, e.g. "README.mustache".
        directory: Output directory relative to the output root ("" for the root).
        filename: Name of the rendered file.
    """

    template: str
    directory: str
    filename: str

    @property
    def path(self) -> str:
        """Output path relative to the output root."""
        return os.path.join(self.directory, self.filename)


def package_directory(source_folder: str, package_name: str) -> str:
    """Directory for package scoped files.

    The package name's dots become path separators; the source folder is
    used as given. Malformed names are not corrected.

    Example:
        >>> package_directory('src', 'org.openapitools.server')  # doctest: +SKIP
        'src/org/openapitools/server'
    """
    return os.path.join(source_folder, package_name.replace('.', os.sep))


def assemble_plan(configuration: Configuration) -> tuple[ArtifactPlanEntry, ...]:
    """Build the ordered artifact plan for a checked configuration.

    Args:
        configuration: Output of the compatibility check.

    Returns:
        The plan entries in rendering order.
    """
    library = configuration.library or DEFAULT_LIBRARY
    ktor = library is Library.KTOR
    plan: list[ArtifactPlanEntry] = []

    plan.append(ArtifactPlanEntry('README.mustache', '', 'README.md'))

    if ktor:
        plan.append(ArtifactPlanEntry('Dockerfile.mustache', '', 'Dockerfile'))

    plan.append(ArtifactPlanEntry('build.gradle.mustache', '', 'build.gradle'))
    plan.append(ArtifactPlanEntry('settings.gradle.mustache', '', 'settings.gradle'))
    plan.append(ArtifactPlanEntry('gradle.properties', '', 'gradle.properties'))

    if ktor:
        package_folder = package_directory(
            configuration.get(SOURCE_FOLDER, ''), configuration.get(PACKAGE_NAME, '')
        )
        resources_folder = configuration.get(RESOURCES_FOLDER, '')

        plan.append(ArtifactPlanEntry('AppMain.kt.mustache', package_folder, 'AppMain.kt'))
        plan.append(
            ArtifactPlanEntry('Configuration.kt.mustache', package_folder, 'Configuration.kt')
        )

        if configuration.is_enabled(GENERATE_APIS) and configuration.is_enabled(RESOURCES):
            plan.append(ArtifactPlanEntry('Paths.kt.mustache', package_folder, 'Paths.kt'))

        plan.append(
            ArtifactPlanEntry('application.conf.mustache', resources_folder, 'application.conf')
        )
        plan.append(ArtifactPlanEntry('logback.xml', resources_folder, 'logback.xml'))

        infrastructure_folder = os.path.join(package_folder, INFRASTRUCTURE_FOLDER)
        plan.append(
            ArtifactPlanEntry('ApiKeyAuth.kt.mustache', infrastructure_folder, 'ApiKeyAuth.kt')
        )

    return tuple(plan)


def duplicate_paths(plan: tuple[ArtifactPlanEntry, ...]) -> list[str]:
    """Output paths that more than one entry writes to, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for entry in plan:
        if entry.path in seen and entry.path not in duplicates:
            duplicates.append(entry.path)
        seen.add(entry.path)
    return duplicates


def effective_plan(plan: tuple[ArtifactPlanEntry, ...]) -> tuple[ArtifactPlanEntry, ...]:
    """Drop entries overwritten by a later entry for the same path."""
    last_index = {entry.path: index for index, entry in enumerate(plan)}
    return tuple(entry for index, entry in enumerate(plan) if last_index[entry.path] == index)
