import os
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from kserver.constants import GENERATOR_INFO
from kserver.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['kserver.yaml', 'kserver.yml']


class GeneratorConfig(BaseSettings):
    """Settings for one generator run.

    Values come from a config file, ``[tool.kserver]`` in pyproject.toml, or
    ``KSERVER_`` prefixed environment variables for anything left unset.
    """

    model_config = SettingsConfigDict(env_prefix='KSERVER_', extra='ignore')

    options: dict[str, Any] = Field(
        default_factory=dict,
        description='Raw generator options, e.g. {"library": "ktor", "featureCORS": "true"}.',
    )

    output: str = Field(
        GENERATOR_INFO.output_folder,
        description='Output directory the artifact plan is relative to.',
    )


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f'Cannot read configuration: {e}', config_path=str(path)
        ) from e


def load_yaml(path: str | Path) -> Any:
    import yaml

    text = _read_text(path)
    try:
        return yaml.load(text, Loader=yaml.FullLoader)
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Invalid YAML: {e}', config_path=str(path)) from e


def _build(data: Any, source: str) -> GeneratorConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError('Configuration root must be a mapping', config_path=source)

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        field = '.'.join(str(part) for part in e.errors()[0]['loc'])
        raise ConfigurationError('Invalid configuration', config_path=source, field=field) from e


def get_config(path: str | None = None) -> GeneratorConfig:
    """Load configuration from a file, pyproject.toml, or return defaults.

    Args:
        path: Explicit YAML or JSON file. When omitted the working directory
            is searched for kserver.yaml, kserver.yml and pyproject.toml.

    Raises:
        ConfigurationError: If the file is missing, unparseable or invalid.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _build(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _build(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(_read_text(candidate))
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f'Invalid TOML: {e}', config_path=str(candidate)
            ) from e
        tools = pyproject.get('tool', {})

        if 'kserver' in tools:
            return _build(tools['kserver'], str(candidate))

    return GeneratorConfig()
