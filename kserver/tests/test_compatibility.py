"""Tests for the library compatibility check."""

import pytest

from kserver.constants import Library
from kserver.resolve.compatibility import check_compatibility, supported_options
from kserver.resolve.options import normalize_options
from kserver.resolve.types import (
    LIBRARY_DEFAULTED,
    UNSUPPORTED_OPTION,
    DiagnosticLevel,
)
from kserver.tests.fixtures import FEATURE_KEYS


def _check(raw):
    return check_compatibility(normalize_options(raw).configuration)


class TestSupportedOptions:
    """Tests for supported_options."""

    def test_ktor_supports_middleware_flags(self):
        assert supported_options(Library.KTOR) == frozenset(FEATURE_KEYS)

    def test_jaxrs_spec_supports_library_flags(self):
        assert supported_options(Library.JAXRS_SPEC) == frozenset(
            {'interfaceOnly', 'useBeanValidation', 'useCoroutines', 'returnResponse'}
        )


class TestLibraryDefault:
    """Tests for defaulting an empty library."""

    @pytest.mark.parametrize('raw', [{}, {'library': ''}, {'library': None}])
    def test_empty_library_defaults_to_ktor(self, raw):
        """Test that the default is applied and reported exactly once."""
        result = _check(raw)

        assert result.configuration.library is Library.KTOR
        assert result.configuration.get('library') == 'ktor'
        codes = [d.code for d in result.diagnostics]
        assert codes.count(LIBRARY_DEFAULTED) == 1
        diagnostic = result.diagnostics[codes.index(LIBRARY_DEFAULTED)]
        assert diagnostic.level is DiagnosticLevel.INFO
        assert diagnostic.option == 'library'

    def test_selected_library_is_not_reported(self):
        result = _check({'library': 'ktor'})
        assert result.diagnostics == ()

    def test_default_logged(self, caplog):
        with caplog.at_level('INFO', logger='kserver.resolve.compatibility'):
            _check({})
        assert 'Default to ktor' in caplog.text


class TestFlagReconciliation:
    """Tests for dropping and keeping flags per library."""

    def test_ktor_drops_defaulted_library_flags(self):
        """Test that jaxrs-spec only flags are removed for ktor."""
        configuration = _check({'library': 'ktor'}).configuration

        for key in ('interfaceOnly', 'useBeanValidation', 'useCoroutines', 'returnResponse'):
            assert key not in configuration
        for key in FEATURE_KEYS:
            assert key in configuration

    def test_jaxrs_spec_drops_defaulted_feature_flags(self):
        configuration = _check({'library': 'jaxrs-spec'}).configuration

        for key in FEATURE_KEYS:
            assert key not in configuration
        assert configuration.get('useBeanValidation') is False

    def test_explicitly_enabled_unsupported_flag_is_kept(self):
        """Test that a forced-on flag survives with an advisory warning."""
        result = _check({'library': 'jaxrs-spec', 'featureCORS': 'true'})

        assert result.configuration.get('featureCORS') is True
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].code == UNSUPPORTED_OPTION
        assert result.diagnostics[0].level is DiagnosticLevel.WARNING
        assert result.diagnostics[0].option == 'featureCORS'

    def test_explicitly_disabled_unsupported_flag_is_dropped(self):
        result = _check({'library': 'ktor', 'interfaceOnly': 'false'})
        assert 'interfaceOnly' not in result.configuration
        assert result.diagnostics == ()

    def test_check_never_raises(self):
        """Test that every flag forced on for the wrong library still resolves."""
        raw = {key: 'true' for key in FEATURE_KEYS}
        result = _check({**raw, 'library': 'jaxrs-spec'})
        assert len(result.diagnostics) == len(FEATURE_KEYS)
