"""Common literal values used across inkwell.

These constants keep default paths, config filenames, and extensions
centralized so the loader, the compile pipeline, and tests can import the same
values without drifting. Intended for internal use within the inkwell package.

Examples
--------
>>> from inkwell import _constants
>>> _constants.config_filename("local")
'config.yaml'
>>> _constants.config_filename("production")
'config.production.yaml'
>>> _constants.DEFAULT_OUTPUT_TEMPLATE.format(env="local")
'build_local'
"""

DEFAULT_ENV = "local"
BASE_CONFIG_FILE = "config.yaml"
ENV_CONFIG_TEMPLATE = "config.{env}.yaml"
DEFAULT_OUTPUT_TEMPLATE = "build_{env}"
DEFAULT_FILETYPES = ("html",)
DEFAULT_OUTPUT_EXTENSION = "html"
DEFAULT_ASSETS_DESTINATION = "assets"
DEFAULT_PLAINTEXT_EXTENSION = "txt"


def config_filename(env: str) -> str:
    """Return the config file a user edits for ``env``."""
    if env == DEFAULT_ENV:
        return BASE_CONFIG_FILE
    return ENV_CONFIG_TEMPLATE.format(env=env)
