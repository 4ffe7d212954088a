"""Config file commands."""

import typer

from cli.config import get_config_path, init_config, load_config, validate_config
from cli.output import error_message, print_yaml, success_message
from core.database.engine import sanitize_connection_string

app = typer.Typer(help="Manage the model-gen config file")


@app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Create a config file with default values."""
    try:
        config_path = init_config(force=force)
    except FileExistsError as e:
        error_message(str(e), hint="Use --force to overwrite it")
        raise typer.Exit(1) from e

    success_message(f"Config written to {config_path}")


@app.command("show")
def config_show() -> None:
    """Show the effective configuration with passwords masked."""
    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    data = config.model_dump(by_alias=True)
    data["connections"] = {name: sanitize_connection_string(url) for name, url in config.connections.items()}
    typer.echo(f"# {get_config_path()}")
    print_yaml(data)


@app.command("validate")
def config_validate() -> None:
    """Validate the config file."""
    try:
        config = load_config()
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    errors = validate_config(config)
    if errors:
        for error in errors:
            error_message(error)
        raise typer.Exit(1)

    success_message(f"Valid config: {get_config_path()}")
