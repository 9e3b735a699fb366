"""llrt-function CLI.

Inspect binary variants and warm the binary cache, e.g. in a CI step that
runs before ``cdk synth``.
"""

import logging
import sys

import click

from .config import create_default_config
from .config import load_config
from .errors import LlrtError
from .models import DEFAULT_VERSION
from .models import Architecture
from .models import CacheKey
from .models import LlrtBinaryType
from .toolchain import LlrtToolchain

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


variant_options = [
    click.option("--version", "version", default=DEFAULT_VERSION, show_default=True, help="LLRT release tag"),
    click.option(
        "--arch",
        type=click.Choice([a.value for a in Architecture]),
        default=Architecture.X86_64.value,
        show_default=True,
        help="CPU architecture",
    ),
    click.option(
        "--binary-type",
        type=click.Choice([t.value for t in LlrtBinaryType]),
        default=LlrtBinaryType.STANDARD.value,
        show_default=True,
        help="Embedded AWS SDK subset",
    ),
]


def with_variant_options(func):
    for option in reversed(variant_options):
        func = option(func)
    return func


@click.group()
@click.pass_context
def cli(ctx: click.Context):
    """Resolve and cache LLRT binaries for CDK functions."""
    settings = load_config()
    _configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command()
@with_variant_options
@click.pass_obj
def resolve(settings, version: str, arch: str, binary_type: str):
    """Show the release asset and cache location of a variant."""
    toolchain = LlrtToolchain.from_settings(settings)
    try:
        key = CacheKey(version, Architecture(arch), LlrtBinaryType(binary_type))
        variant = toolchain.resolver.resolve(key.version, key.architecture, key.binary_type)
    except LlrtError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Binary:  {variant.binary_name}")
    click.echo(f"URL:     {variant.url}")
    click.echo(f"Target:  {variant.target}")
    click.echo(f"Cache:   {toolchain.cache.binary_path(key)}")
    click.echo(f"Cached:  {'yes' if toolchain.cache.is_cached(key) else 'no'}")


@cli.command()
@with_variant_options
@click.option("--force", is_flag=True, help="Download again even if already cached")
@click.pass_obj
def fetch(settings, version: str, arch: str, binary_type: str, force: bool):
    """Download a variant into the cache and print the bootstrap path."""
    if force:
        settings = settings.model_copy(update={"force_refresh": True})
    toolchain = LlrtToolchain.from_settings(settings)
    try:
        key = CacheKey(version, Architecture(arch), LlrtBinaryType(binary_type))
        path = toolchain.cache.ensure(key)
    except LlrtError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(str(path))


@cli.command("init-config")
def init_config():
    """Write a default llrt.yaml to the working directory."""
    path = create_default_config()
    click.echo(f"Config: {path}")


if __name__ == "__main__":
    cli()
