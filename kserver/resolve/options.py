"""Option normalization.

Turns the raw option map supplied by the host framework (mostly strings from
the command line or a config file) into a fully populated
:class:`~kserver.resolve.types.Configuration` with canonical typed values.
"""

import logging
from typing import Any, Mapping

from kserver.constants import (
    ALL_FLAGS,
    API_PACKAGE,
    ARTIFACT_ID,
    DEFAULT_ARTIFACT_ID,
    DEFAULT_GENERATE_APIS,
    DEFAULT_LIBRARY,
    DEFAULT_MODEL_MUTABLE,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_RESOURCES_FOLDER,
    DEFAULT_SOURCE_FOLDER,
    GENERATE_APIS,
    LIBRARY,
    MODEL_MUTABLE,
    MODEL_PACKAGE,
    PACKAGE_NAME,
    RESOURCES_FOLDER,
    SOURCE_FOLDER,
    Library,
)
from kserver.resolve.types import (
    INVALID_BOOLEAN,
    UNKNOWN_LIBRARY,
    Configuration,
    Diagnostic,
    DiagnosticLevel,
    StageResult,
)

logger = logging.getLogger(__name__)

BOOLEAN_DEFAULTS: dict[str, bool] = {
    **{flag.key: flag.default for flag in ALL_FLAGS},
    GENERATE_APIS: DEFAULT_GENERATE_APIS,
    MODEL_MUTABLE: DEFAULT_MODEL_MUTABLE,
}

STRING_DEFAULTS: dict[str, str] = {
    PACKAGE_NAME: DEFAULT_PACKAGE_NAME,
    ARTIFACT_ID: DEFAULT_ARTIFACT_ID,
    SOURCE_FOLDER: DEFAULT_SOURCE_FOLDER,
    RESOURCES_FOLDER: DEFAULT_RESOURCES_FOLDER,
}


def parse_bool(value: Any, default: bool) -> tuple[bool, bool]:
    """Parse a boolean option value.

    Only the exact strings "true" and "false" (or real booleans) are
    accepted. Anything else yields ``default``.

    Args:
        value: The raw option value.
        default: Value to fall back to when ``value`` cannot be parsed.

    Returns:
        A ``(value, valid)`` tuple where ``valid`` tells whether the raw
        value was understood.
    """
    if isinstance(value, bool):
        return value, True
    if value == 'true':
        return True, True
    if value == 'false':
        return False, True
    return default, False


def parse_library(value: Any) -> Library | None:
    """Parse the library option.

    Returns:
        The matching Library, or None when the option is unset or empty.

    Raises:
        ValueError: If the value names no known library.
    """
    if value is None or value == '':
        return None
    return Library(value)


def _is_blank(value: Any) -> bool:
    return value is None or value == ''


def normalize_options(raw: Mapping[str, Any]) -> StageResult:
    """Normalize the raw option map into a Configuration.

    Every known key ends up in the result: supplied values are coerced to
    their canonical type, omitted ones receive the built-in default. An
    unset library is stored as an empty string and left for the
    compatibility check to default. Unknown keys pass through untouched.

    Args:
        raw: Option key to raw value, as supplied by the caller.

    Returns:
        The normalized configuration and any diagnostics raised while
        parsing.
    """
    values = dict(raw)
    explicit = set(raw)
    diagnostics: list[Diagnostic] = []

    try:
        library = parse_library(raw.get(LIBRARY))
    except ValueError:
        library = DEFAULT_LIBRARY
        explicit.discard(LIBRARY)
        message = (
            f'Unknown `library` option {raw.get(LIBRARY)!r}. '
            f'Default to {DEFAULT_LIBRARY.value}'
        )
        logger.warning(message)
        diagnostics.append(
            Diagnostic(DiagnosticLevel.WARNING, UNKNOWN_LIBRARY, message, LIBRARY)
        )
    if library is None:
        explicit.discard(LIBRARY)
    values[LIBRARY] = library.value if library else ''

    for key, default in BOOLEAN_DEFAULTS.items():
        if key not in raw:
            values[key] = default
            continue

        parsed, valid = parse_bool(raw[key], default)
        if not valid:
            explicit.discard(key)
            message = (
                f'Option `{key}` has unparseable boolean value {raw[key]!r}. '
                f'Default to {str(default).lower()}'
            )
            logger.warning(message)
            diagnostics.append(
                Diagnostic(DiagnosticLevel.WARNING, INVALID_BOOLEAN, message, key)
            )
        values[key] = parsed

    for key, default in STRING_DEFAULTS.items():
        if _is_blank(raw.get(key)):
            explicit.discard(key)
            values[key] = default
        else:
            values[key] = str(raw[key])

    package_name = values[PACKAGE_NAME]
    for key, suffix in ((API_PACKAGE, 'apis'), (MODEL_PACKAGE, 'models')):
        if _is_blank(raw.get(key)):
            explicit.discard(key)
            values[key] = f'{package_name}.{suffix}'

    return StageResult(Configuration(values, frozenset(explicit)), tuple(diagnostics))
