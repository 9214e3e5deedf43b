"""Radio button inspection commands (``flask radio-buttons ...``)."""

import json

import click
from flask import current_app
from flask.cli import AppGroup

from .errors import OptionsConfigurationError
from .models import RadioButtonData
from .services.options_registry import OptionsRegistry

radio_buttons_cli = AppGroup("radio-buttons", help="Inspect radio button options and stored choices.")


def _registry() -> OptionsRegistry:
    return current_app.extensions["radio_buttons"]


@radio_buttons_cli.command("show")
@click.argument("type_name", required=False)
def show_command(type_name):
    """Print loaded options declarations (or preview TYPE_NAME from the source)."""
    registry = _registry()
    if type_name:
        if registry.is_loaded(type_name):
            declarations = [registry.get(type_name)]
        else:
            # Preview only; the app registry loads a type when its host is attached.
            try:
                declarations = [OptionsRegistry(registry.source).load(type_name)]
            except OptionsConfigurationError as exc:
                raise click.ClickException(str(exc)) from exc
    else:
        declarations = [registry.get(name) for name in registry.type_names()]

    if not declarations:
        click.echo("No radio button declarations loaded.")
        return

    for declaration in declarations:
        click.echo(f"{declaration.type_name}:")
        if declaration.is_empty:
            click.echo("  (no radio button sets)")
        for name, options in declaration.choices.items():
            click.echo(f"  {name}: {', '.join(options)}")


@radio_buttons_cli.command("check-config")
def check_config_command():
    """Parse every section of the configured options source."""
    source = _registry().source
    if not source:
        click.echo("No options source configured.")
        return

    checker = OptionsRegistry(source)
    try:
        type_names = checker.available_type_names()
        for type_name in type_names:
            declaration = checker.load(type_name)
            click.echo(f"✅ {type_name}: {len(declaration)} set(s)")
    except OptionsConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    if not type_names:
        click.echo(f"ℹ️  {source} declares no radio button sets")


@radio_buttons_cli.command("dump")
@click.argument("model_type")
@click.argument("model_id", type=int)
def dump_command(model_type, model_id):
    """Print the stored choices of one host record."""
    record = RadioButtonData.for_host(model_type, model_id)
    if record is None:
        raise click.ClickException(f"No radio button data for {model_type}#{model_id}")
    click.echo(json.dumps(dict(record.data), indent=2, sort_keys=True))


def register_commands(app):
    """Register CLI commands"""
    app.cli.add_command(radio_buttons_cli)
