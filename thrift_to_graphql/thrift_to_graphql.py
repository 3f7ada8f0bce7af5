import json
import logging
from pathlib import Path

import click

from . import __version__
from .cli_utils import generation_comment
from .config import ServiceConfig, ThriftToGraphQLConfig
from .generator import SchemaGenerator


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--all-methods", is_flag=True, default=False, help="Expose every service method, not only the configured ones")
@click.option("--convert-enum-to-int", is_flag=True, default=False, help="Compile enums to Int")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log loaded files and skipped methods")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(allow_dash=True, resolve_path=True))
def thrift_to_graphql(config, all_methods, convert_enum_to_int, verbose, path, output):
    """Write the GraphQL SDL of the service in PATH to OUTPUT ('-' for stdout).

    When the config lists services, PATH is the directory their files are
    relative to.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = ThriftToGraphQLConfig.from_dict(json.load(f))
    else:
        config = ThriftToGraphQLConfig()

    path = Path(path)
    if config.services:
        config.idl_path = str(path if path.is_dir() else path.parent)
    else:
        if path.is_dir():
            raise click.BadParameter("a Thrift file is required when the config lists no services", param_hint="PATH")
        config.idl_path = str(path.parent)
        config.services = {path.stem: ServiceConfig(file=path.name)}
        config.strict = False

    if all_methods:
        config.strict = False
    if convert_enum_to_int:
        config.convert_enum_to_int = True

    out = SchemaGenerator(config).generate_sdl()
    if config.add_generation_comment:
        out = generation_comment(thrift_to_graphql, __version__) + "\n\n" + out
    if not out.endswith("\n"):
        out += "\n"

    if output == "-":
        click.echo(out, nl=False)
    else:
        with open(output, "w") as f:
            f.write(out)
