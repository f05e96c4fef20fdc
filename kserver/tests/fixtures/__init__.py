"""Sample option maps shared by the kserver tests."""

# Nothing supplied; every option takes its default
EMPTY_OPTIONS: dict = {}

# Full-stack server with a custom package layout
KTOR_OPTIONS = {
    'library': 'ktor',
    'packageName': 'org.openapitools.server',
    'sourceFolder': 'src',
    'resourcesFolder': 'resources',
    'generateApis': 'true',
}

# Interface stubs only
JAXRS_SPEC_OPTIONS = {
    'library': 'jaxrs-spec',
    'interfaceOnly': 'true',
    'useBeanValidation': 'true',
    'useCoroutines': 'false',
    'returnResponse': 'true',
}

# The seven middleware feature flags
FEATURE_KEYS = [
    'featureAutoHead',
    'featureConditionalHeaders',
    'featureHSTS',
    'featureCORS',
    'featureCompression',
    'featureResources',
    'featureMetrics',
]

KTOR_TEMPLATES = [
    'README.mustache',
    'Dockerfile.mustache',
    'build.gradle.mustache',
    'settings.gradle.mustache',
    'gradle.properties',
    'AppMain.kt.mustache',
    'Configuration.kt.mustache',
    'Paths.kt.mustache',
    'application.conf.mustache',
    'logback.xml',
    'ApiKeyAuth.kt.mustache',
]

JAXRS_SPEC_TEMPLATES = [
    'README.mustache',
    'build.gradle.mustache',
    'settings.gradle.mustache',
    'gradle.properties',
]

SAMPLE_YAML_CONFIG = """
output: ./build/server
options:
  library: jaxrs-spec
  packageName: com.example.api
  interfaceOnly: "true"
  featureCORS: true
"""
