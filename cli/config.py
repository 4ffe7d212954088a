"""Configuration file support for the model-gen CLI.

The config file is YAML, located at ``~/.model-gen.yaml`` unless the
``MODEL_GEN_CONFIG`` environment variable points elsewhere. It holds named
connection strings and defaults for command options.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

CONFIG_ENV_VAR = "MODEL_GEN_CONFIG"
DEFAULT_CONFIG_FILENAME = ".model-gen.yaml"
DEFAULT_CONNECTION_NAME = "default"
OUTPUT_FORMATS = ("text", "json")


class GeneratorDefaults(BaseModel):
    """Defaults for the generate command"""

    schema_name: str = Field(default="dbo", alias="schema", description="Schema qualifying table names")
    output_dir: str = Field(default="./Models", description="Directory receiving model files")

    model_config = {"populate_by_name": True}


class OutputDefaults(BaseModel):
    """Defaults for listing output"""

    format: str = Field(default="text", description="Output format: text or json")


class Defaults(BaseModel):
    """Default option values"""

    generator: GeneratorDefaults = Field(default_factory=GeneratorDefaults)
    output: OutputDefaults = Field(default_factory=OutputDefaults)


class Config(BaseModel):
    """Root of the config file"""

    version: str = "1.0"
    connections: dict[str, str] = Field(default_factory=dict, description="Named connection strings")
    defaults: Defaults = Field(default_factory=Defaults)


def get_config_path() -> Path:
    """Return the config file path, honouring MODEL_GEN_CONFIG"""
    custom_path = os.environ.get(CONFIG_ENV_VAR)
    if custom_path:
        return Path(custom_path)
    return Path.home() / DEFAULT_CONFIG_FILENAME


def load_config() -> Config:
    """Load the config file.

    Returns:
        The parsed Config, or defaults if the file does not exist

    Raises:
        ValueError: If the file is not valid YAML or fails validation
    """
    config_path = get_config_path()
    if not config_path.exists():
        return Config()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: Config) -> Path:
    """Write the config file and return its path"""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        yaml.dump(config.model_dump(by_alias=True), default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    return config_path


def init_config(force: bool = False) -> Path:
    """Create a config file with default values.

    Args:
        force: Overwrite an existing file

    Returns:
        Path of the created file

    Raises:
        FileExistsError: If the file exists and force is False
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {config_path}")
    return save_config(Config())


def get_connection(name: str, config: Config | None = None) -> str:
    """Return a named connection string.

    Raises:
        KeyError: If no connection has that name
    """
    if config is None:
        config = load_config()
    if name not in config.connections:
        raise KeyError(f"Connection '{name}' not found in config")
    return config.connections[name]


def resolve_connection(connection: str, config: Config | None = None) -> str:
    """Resolve ``@name`` references to named connections; other values pass through"""
    if connection.startswith("@"):
        return get_connection(connection[1:], config)
    return connection


def resolve_connection_argument(connection: str | None, config: Config | None = None) -> str:
    """Resolve a CLI connection argument, falling back to the 'default' connection.

    Raises:
        ValueError: If no connection is given and none is configured
        KeyError: If an ``@name`` reference is unknown
    """
    if config is None:
        config = load_config()
    if connection is None:
        if DEFAULT_CONNECTION_NAME not in config.connections:
            raise ValueError(
                f"No connection string given and no '{DEFAULT_CONNECTION_NAME}' connection in {get_config_path()}"
            )
        connection = config.connections[DEFAULT_CONNECTION_NAME]
    return resolve_connection(connection, config)


def get_generator_defaults(config: Config | None = None) -> GeneratorDefaults:
    if config is None:
        config = load_config()
    return config.defaults.generator


def get_output_defaults(config: Config | None = None) -> OutputDefaults:
    if config is None:
        config = load_config()
    return config.defaults.output


def validate_config(config: Config) -> list[str]:
    """Check a config for values that would fail at run time.

    Returns:
        List of error messages, empty when the config is valid
    """
    errors = []

    for name, connection_string in config.connections.items():
        try:
            make_url(connection_string)
        except ArgumentError:
            errors.append(f"'connections.{name}' is not a valid database URL")

    if not config.defaults.generator.output_dir.strip():
        errors.append("'defaults.generator.output_dir' must not be empty")

    if config.defaults.output.format not in OUTPUT_FORMATS:
        errors.append("'defaults.output.format' must be 'text' or 'json'")

    return errors
