"""Tests for artifact plan assembly."""

import itertools
import os

import pytest

from kserver.resolve.plan import (
    ArtifactPlanEntry,
    assemble_plan,
    duplicate_paths,
    effective_plan,
    package_directory,
)
from kserver.resolve.types import Configuration
from kserver.tests.fixtures import JAXRS_SPEC_TEMPLATES, KTOR_TEMPLATES


def _ktor(**values):
    base = {
        'library': 'ktor',
        'packageName': 'org.openapitools.server',
        'sourceFolder': 'src',
        'resourcesFolder': 'resources',
        'generateApis': True,
        'featureResources': True,
    }
    return Configuration({**base, **values})


class TestPackageDirectory:
    """Tests for package_directory."""

    def test_dots_become_separators(self):
        assert package_directory('src', 'org.openapitools.server') == os.path.join(
            'src', 'org', 'openapitools', 'server'
        )

    def test_source_folder_used_as_given(self):
        assert package_directory('src/main/kotlin', 'com.example') == os.path.join(
            'src/main/kotlin', 'com', 'example'
        )

    def test_malformed_package_passes_through(self):
        """Test that empty package segments are not cleaned up."""
        assert package_directory('src', 'org..server') == os.path.join(
            'src', 'org' + os.sep + os.sep + 'server'
        )


class TestArtifactPlanEntry:
    """Tests for ArtifactPlanEntry."""

    def test_root_path(self):
        assert ArtifactPlanEntry('README.mustache', '', 'README.md').path == 'README.md'

    def test_nested_path(self):
        entry = ArtifactPlanEntry('logback.xml', 'resources', 'logback.xml')
        assert entry.path == os.path.join('resources', 'logback.xml')

    def test_entries_are_frozen(self):
        entry = ArtifactPlanEntry('README.mustache', '', 'README.md')
        with pytest.raises(AttributeError):
            entry.filename = 'OTHER.md'


class TestAssemblePlan:
    """Tests for assemble_plan."""

    def test_ktor_plan_order(self):
        """Test the exact order of the full-stack plan."""
        plan = assemble_plan(_ktor())
        assert [entry.template for entry in plan] == KTOR_TEMPLATES

    def test_ktor_plan_locations(self):
        package = os.path.join('src', 'org', 'openapitools', 'server')
        plan = {entry.template: entry for entry in assemble_plan(_ktor())}

        assert plan['README.mustache'].directory == ''
        assert plan['Dockerfile.mustache'].directory == ''
        assert plan['build.gradle.mustache'].filename == 'build.gradle'
        assert plan['settings.gradle.mustache'].filename == 'settings.gradle'
        assert plan['gradle.properties'].directory == ''
        assert plan['AppMain.kt.mustache'].directory == package
        assert plan['Configuration.kt.mustache'].directory == package
        assert plan['Paths.kt.mustache'].path == os.path.join(package, 'Paths.kt')
        assert plan['application.conf.mustache'].directory == 'resources'
        assert plan['logback.xml'].directory == 'resources'
        assert plan['ApiKeyAuth.kt.mustache'].path == os.path.join(
            package, 'infrastructure', 'ApiKeyAuth.kt'
        )

    def test_paths_requires_resources_feature(self):
        """Test that Paths.kt is skipped without typed resources."""
        plan = assemble_plan(_ktor(featureResources=False))
        assert 'Paths.kt' not in [entry.filename for entry in plan]

    def test_paths_requires_generate_apis(self):
        plan = assemble_plan(_ktor(generateApis=False))
        assert 'Paths.kt' not in [entry.filename for entry in plan]

    def test_missing_flags_count_as_disabled(self):
        configuration = _ktor().without(['featureResources'])
        assert 'Paths.kt' not in [e.filename for e in assemble_plan(configuration)]

    def test_jaxrs_spec_plan(self):
        plan = assemble_plan(Configuration({'library': 'jaxrs-spec'}))
        assert [entry.template for entry in plan] == JAXRS_SPEC_TEMPLATES

    def test_jaxrs_spec_never_emits_server_files(self):
        """Test every flag combination for the jaxrs-spec library."""
        keys = ['generateApis', 'featureResources', 'featureCORS', 'featureMetrics']
        excluded = {'Dockerfile', 'AppMain.kt', 'ApiKeyAuth.kt'}

        for combination in itertools.product([True, False], repeat=len(keys)):
            values = dict(zip(keys, combination), library='jaxrs-spec')
            filenames = {e.filename for e in assemble_plan(Configuration(values))}
            assert not filenames & excluded

    def test_unresolved_library_uses_default(self):
        plan = assemble_plan(Configuration({'library': ''}))
        assert 'Dockerfile' in [entry.filename for entry in plan]

    def test_plan_is_deterministic(self):
        assert assemble_plan(_ktor()) == assemble_plan(_ktor())

    def test_no_duplicate_paths(self):
        assert duplicate_paths(assemble_plan(_ktor())) == []


class TestDuplicatePaths:
    """Tests for duplicate_paths and effective_plan."""

    @pytest.fixture
    def plan(self):
        return (
            ArtifactPlanEntry('a.mustache', '', 'out.txt'),
            ArtifactPlanEntry('b.mustache', '', 'other.txt'),
            ArtifactPlanEntry('c.mustache', '', 'out.txt'),
        )

    def test_duplicate_paths(self, plan):
        assert duplicate_paths(plan) == ['out.txt']

    def test_last_entry_wins(self, plan):
        """Test that a later entry for the same path replaces the earlier one."""
        assert [entry.template for entry in effective_plan(plan)] == [
            'b.mustache',
            'c.mustache',
        ]
