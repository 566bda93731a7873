"""
ROUTEBIND CLI

Inspect how classes and routes would bind without running an application.

Usage:
    routebind describe app.controllers:DogController --method show
    routebind match "users/{user}/dogs/{dog:slug}" /users/1/dogs/rex --scoped
"""

import importlib
import os
import sys

import click

from routebind.config import VALID_LOG_LEVELS
from routebind.contracts import UrlRoutable
from routebind.descriptors import ClassDescriptor, ParameterDescriptor
from routebind.exceptions import RouteMismatch
from routebind.logging import setup_logging
from routebind.route import Route

CLASSIFICATION_COLORS = {
    "enum": "magenta",
    "routable": "green",
    "service": "blue",
    "value": None,
}


def _version_callback(ctx, param, value):
    """Display version and exit."""
    if value:
        from routebind import __version__
        click.echo(f'ROUTEBIND CLI v{__version__}')
        ctx.exit()


def classify(parameter: ParameterDescriptor) -> str:
    """How the Binder treats *parameter*: enum, routable, service or value."""
    if parameter.has_string_backed_enums():
        return "enum"
    if parameter.has_type(UrlRoutable):
        return "routable"
    if parameter.service_type is not None:
        return "service"
    return "value"


def load_target(target_path: str):
    """
    Import ``module:Class`` (or ``module.Class``).

    The current directory is put on sys.path so project modules resolve.
    """
    if ":" in target_path:
        module_name, _, attr = target_path.partition(":")
    else:
        module_name, _, attr = target_path.rpartition(".")

    if not module_name or not attr:
        raise click.BadParameter(f"Expected MODULE:CLASS, got '{target_path}'", param_hint="TARGET")

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}", param_hint="TARGET")

    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attr}'", param_hint="TARGET")

    if not isinstance(target, type):
        raise click.BadParameter(f"'{target_path}' is not a class", param_hint="TARGET")
    return target


@click.group()
@click.option('--version', '-V', is_flag=True, callback=_version_callback, expose_value=False, is_eager=True, help='Show version and exit')
@click.option('--log-level', type=click.Choice(sorted(VALID_LOG_LEVELS), case_sensitive=False), default=None, help='Enable routebind logging at this level')
def cli(log_level):
    """
    ROUTEBIND CLI - Route parameter binding for Python handlers

    Inspect how handler classes and route patterns bind.
    """
    if log_level:
        setup_logging(log_level)


@cli.command()
@click.argument('target')
@click.option('--method', '-m', default='__init__', show_default=True, help='Method to describe')
def describe(target, method):
    """
    Show how each parameter of TARGET's method would bind.

    TARGET is MODULE:CLASS, e.g. app.controllers:DogController
    """
    cls = load_target(target)
    descriptor = ClassDescriptor.of(cls)
    described = descriptor.method(method)

    if described is None:
        if method == '__init__':
            click.secho(f"{descriptor.name} has no constructor (built without arguments)", fg='yellow')
            return
        click.secho(f"[ERROR] {descriptor.name} has no method '{method}'", fg='red', bold=True, err=True)
        sys.exit(1)

    click.secho(f"{descriptor.name}.{described.name}", fg='cyan', bold=True)

    parameters = described.parameters()
    if not parameters:
        click.echo("  (no parameters)")

    width = max((len(p.name) for p in parameters), default=0)
    for parameter in parameters:
        kind = classify(parameter)
        types = " | ".join(parameter.type_names) or "-"
        default = f" = {parameter.default!r}" if parameter.has_default else ""
        click.echo(f"  {parameter.name.ljust(width)}  ", nl=False)
        click.secho(kind.ljust(8), fg=CLASSIFICATION_COLORS[kind], nl=False)
        click.echo(f"  {types}{default}")

    if described.accepts_var_keyword:
        click.echo("  **kwargs  (receives unmatched route parameters)")


@cli.command()
@click.argument('pattern')
@click.argument('path')
@click.option('--scoped', is_flag=True, help='Enforce scoped child bindings')
@click.option('--with-trashed', is_flag=True, help='Allow soft-deleted records to bind')
def match(pattern, path, scoped, with_trashed):
    """
    Match PATH against PATTERN and show the parameter bag.

    PATTERN uses {name} or {name:field} placeholders.
    """
    try:
        route = Route.from_pattern(
            pattern,
            path,
            scoped=True if scoped else None,
            with_trashed=True if with_trashed else None,
        )
    except RouteMismatch as e:
        click.secho(f"[ERROR] {e}", fg='red', bold=True, err=True)
        sys.exit(1)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="PATTERN")

    click.secho(f"Pattern: {pattern}", fg='cyan', bold=True)
    for name, value in route.parameters().items():
        field = route.binding_field_for(name)
        suffix = f"  (field: {field})" if field else ""
        click.echo(f"  {name} = {value!r}{suffix}")

    click.echo(f"Scoped bindings: {'yes' if route.enforces_scoped_bindings() else 'no'}")
    click.echo(f"Trashed bindings: {'yes' if route.allows_trashed_bindings() else 'no'}")


def main():
    """Main entry point for CLI"""
    cli()


if __name__ == '__main__':
    main()
