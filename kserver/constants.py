"""Declarative tables for the Kotlin server generator.

This module holds the static metadata the resolver works from: option keys,
feature flag definitions, the library support matrix, framework defaults and
the descriptive generator metadata shown by the CLI. Nothing here has
behaviour; the resolution logic lives in :mod:`kserver.resolve`.
"""

from dataclasses import dataclass
from enum import Enum


class Library(str, Enum):
    """Target server framework variant."""

    KTOR = 'ktor'
    JAXRS_SPEC = 'jaxrs-spec'


DEFAULT_LIBRARY = Library.KTOR

LIBRARY_DESCRIPTIONS = {
    Library.KTOR: 'ktor framework',
    Library.JAXRS_SPEC: 'JAX-RS spec only',
}

# Option keys
LIBRARY = 'library'
PACKAGE_NAME = 'packageName'
API_PACKAGE = 'apiPackage'
MODEL_PACKAGE = 'modelPackage'
ARTIFACT_ID = 'artifactId'
SOURCE_FOLDER = 'sourceFolder'
RESOURCES_FOLDER = 'resourcesFolder'
GENERATE_APIS = 'generateApis'
MODEL_MUTABLE = 'modelMutable'

AUTOMATIC_HEAD_REQUESTS = 'featureAutoHead'
CONDITIONAL_HEADERS = 'featureConditionalHeaders'
HSTS = 'featureHSTS'
CORS = 'featureCORS'
COMPRESSION = 'featureCompression'
RESOURCES = 'featureResources'
METRICS = 'featureMetrics'

INTERFACE_ONLY = 'interfaceOnly'
USE_BEANVALIDATION = 'useBeanValidation'
USE_COROUTINES = 'useCoroutines'
RETURN_RESPONSE = 'returnResponse'

# Framework defaults
DEFAULT_PACKAGE_NAME = 'org.openapitools.server'
DEFAULT_ARTIFACT_ID = 'kotlin-server'
DEFAULT_SOURCE_FOLDER = 'src/main/kotlin'
DEFAULT_RESOURCES_FOLDER = 'src/main/resources'
DEFAULT_GENERATE_APIS = True
DEFAULT_MODEL_MUTABLE = False
INFRASTRUCTURE_FOLDER = 'infrastructure'


@dataclass(frozen=True)
class FeatureFlag:
    """A named boolean toggle with its default value.

    Attributes:
        key: The option key as it appears in the property bag.
        default: Value used when the caller does not supply the option.
        description: Human readable help text.
        presence_only: Whether templates only see the key when it is true.
    """

    key: str
    default: bool
    description: str
    presence_only: bool = False


FEATURE_FLAGS: tuple[FeatureFlag, ...] = (
    FeatureFlag(
        AUTOMATIC_HEAD_REQUESTS,
        True,
        'Automatically provide responses to HEAD requests for existing routes '
        'that have the GET verb defined.',
    ),
    FeatureFlag(
        CONDITIONAL_HEADERS,
        False,
        'Avoid sending content if client already has same content, by checking '
        'ETag or LastModified properties.',
    ),
    FeatureFlag(
        HSTS,
        True,
        'Adds the Strict-Transport-Security header so browsers only talk to the '
        'server over HTTPS.',
    ),
    FeatureFlag(
        CORS,
        False,
        'Ktor by default provides an interceptor for implementing proper support '
        'for Cross-Origin Resource Sharing (CORS). See enable-cors.org.',
    ),
    FeatureFlag(
        COMPRESSION,
        True,
        'Adds ability to compress outgoing content using gzip, deflate or custom '
        'encoder and thus reduce size of the response.',
    ),
    FeatureFlag(
        RESOURCES,
        True,
        'Generates routes in a typed way, for both: constructing URLs and reading '
        'the parameters.',
    ),
    FeatureFlag(METRICS, True, 'Enables metrics feature.'),
)

LIBRARY_FLAGS: tuple[FeatureFlag, ...] = (
    FeatureFlag(
        INTERFACE_ONLY,
        False,
        'Whether to generate only API interface stubs without the server files. '
        'This option is currently supported only when using jaxrs-spec library.',
        presence_only=True,
    ),
    FeatureFlag(
        USE_BEANVALIDATION,
        False,
        'Use BeanValidation API annotations. This option is currently supported '
        'only when using jaxrs-spec library.',
    ),
    FeatureFlag(
        USE_COROUTINES,
        False,
        'Whether to use the Coroutines. This option is currently supported only '
        'when using jaxrs-spec library.',
        presence_only=True,
    ),
    FeatureFlag(
        RETURN_RESPONSE,
        False,
        'Whether generate API interface should return javax.ws.rs.core.Response '
        'instead of a deserialized entity. Only useful if interfaceOnly is true. '
        'This option is currently supported only when using jaxrs-spec library.',
        presence_only=True,
    ),
)

ALL_FLAGS: tuple[FeatureFlag, ...] = FEATURE_FLAGS + LIBRARY_FLAGS

FLAGS_BY_KEY: dict[str, FeatureFlag] = {flag.key: flag for flag in ALL_FLAGS}

PRESENCE_ONLY_KEYS = frozenset(flag.key for flag in ALL_FLAGS if flag.presence_only)

# Which flags each library honors
SUPPORT_MATRIX: dict[Library, frozenset[str]] = {
    Library.KTOR: frozenset(flag.key for flag in FEATURE_FLAGS),
    Library.JAXRS_SPEC: frozenset(flag.key for flag in LIBRARY_FLAGS),
}


@dataclass(frozen=True)
class GeneratorInfo:
    """Descriptive metadata about the generator."""

    name: str
    tag: str
    help: str
    template_dir: str
    output_folder: str
    model_template_files: dict[str, str]
    api_template_files: dict[str, str]
    documentation_features: tuple[str, ...]
    wire_formats: tuple[str, ...]
    security_features: tuple[str, ...]
    excluded_features: tuple[str, ...]


GENERATOR_INFO = GeneratorInfo(
    name='kotlin-server',
    tag='server',
    help='Generates a Kotlin server.',
    template_dir='kotlin-server',
    output_folder='generated-code/kotlin-server',
    model_template_files={'model.mustache': '.kt'},
    api_template_files={'api.mustache': '.kt'},
    documentation_features=('Readme',),
    wire_formats=('JSON', 'XML'),
    security_features=('BasicAuth', 'ApiKey', 'OAuth2_Implicit'),
    excluded_features=(
        'XMLStructureDefinitions',
        'Callbacks',
        'LinkObjects',
        'ParameterStyling',
        'Polymorphism',
        'Cookie parameters',
    ),
)

LIST_TYPE = 'kotlin.collections.List'
MUTABLE_LIST_TYPE = 'kotlin.collections.MutableList'

# Help for the options that are not boolean feature flags
OPTION_HELP: dict[str, tuple[object, str]] = {
    LIBRARY: (DEFAULT_LIBRARY.value, 'Library template (sub-template) to use.'),
    PACKAGE_NAME: (DEFAULT_PACKAGE_NAME, 'Generated code package name.'),
    API_PACKAGE: ('<packageName>.apis', 'Package for generated API classes.'),
    MODEL_PACKAGE: ('<packageName>.models', 'Package for generated models.'),
    ARTIFACT_ID: (DEFAULT_ARTIFACT_ID, 'Generated artifact id (name of jar).'),
    SOURCE_FOLDER: (DEFAULT_SOURCE_FOLDER, 'Source folder for generated code.'),
    RESOURCES_FOLDER: (DEFAULT_RESOURCES_FOLDER, 'Folder for runtime resources.'),
    GENERATE_APIS: (DEFAULT_GENERATE_APIS, 'Whether API classes are generated.'),
    MODEL_MUTABLE: (DEFAULT_MODEL_MUTABLE, 'Create mutable models.'),
}
