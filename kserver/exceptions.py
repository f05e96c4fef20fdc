"""Custom exceptions for kserver.

The resolver itself never raises for option anomalies; it falls back to
defaults and reports diagnostics instead. The exceptions below are raised by
the surrounding layers (configuration loading and the command line) when the
input cannot be read at all.
"""


class KServerError(Exception):
    """Base exception for all kserver errors.

    Example:
        try:
            config = get_config('kserver.yaml')
        except KServerError as e:
            print(f"kserver error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(KServerError):
    """Error in configuration.

    This exception is raised when a configuration file is missing,
    cannot be parsed, or does not match the expected structure.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OptionSyntaxError(KServerError):
    """A command line option override is not of the form KEY=VALUE.

    Attributes:
        text: The offending command line text.
    """

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid option override '{text}', expected KEY=VALUE")
