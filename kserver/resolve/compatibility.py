"""Library compatibility check.

Picks the default library when none was selected and reconciles the feature
flags in the configuration with what the selected library honors. The check
is advisory: it drops flags the library does not use, keeps the ones the
caller explicitly switched on and reports them, and never fails the run.
"""

import logging

from kserver.constants import (
    ALL_FLAGS,
    DEFAULT_LIBRARY,
    LIBRARY,
    SUPPORT_MATRIX,
    Library,
)
from kserver.resolve.types import (
    LIBRARY_DEFAULTED,
    UNSUPPORTED_OPTION,
    Configuration,
    Diagnostic,
    DiagnosticLevel,
    StageResult,
)

logger = logging.getLogger(__name__)


def supported_options(library: Library) -> frozenset[str]:
    """Flag keys the given library honors."""
    return SUPPORT_MATRIX.get(library, frozenset())


def check_compatibility(configuration: Configuration) -> StageResult:
    """Reconcile a normalized configuration with its library.

    Args:
        configuration: Output of option normalization.

    Returns:
        The configuration with the library resolved and unsupported
        defaulted flags removed, plus advisory diagnostics.
    """
    diagnostics: list[Diagnostic] = []

    library = configuration.library
    if library is None:
        library = DEFAULT_LIBRARY
        configuration = configuration.updated({LIBRARY: library.value})
        message = f'`library` option is empty. Default to {library.value}'
        logger.info(message)
        diagnostics.append(
            Diagnostic(DiagnosticLevel.INFO, LIBRARY_DEFAULTED, message, LIBRARY)
        )

    supported = supported_options(library)
    dropped = []
    for flag in ALL_FLAGS:
        if flag.key in supported or flag.key not in configuration:
            continue

        if flag.key in configuration.explicit and configuration.is_enabled(flag.key):
            message = (
                f'Option `{flag.key}` is not supported by the {library.value} '
                f'library and has no effect'
            )
            logger.warning(message)
            diagnostics.append(
                Diagnostic(DiagnosticLevel.WARNING, UNSUPPORTED_OPTION, message, flag.key)
            )
        else:
            dropped.append(flag.key)

    if dropped:
        logger.debug(f'Dropping options unused by {library.value}: {", ".join(dropped)}')

    return StageResult(configuration.without(dropped), tuple(diagnostics))
