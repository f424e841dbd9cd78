"""
CLI entry point for Serval.

Sends a single request through ``HttpAdapter`` and prints the normalized
payload as JSON.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import httpx

from serval._version import __version__
from serval.adapter import HttpAdapter
from serval.config.settings import get_default_config_path, load_config
from serval.exceptions import HttpResponseError, InvalidConfigurationError
from serval.logging_config import get_logger, setup_logging
from serval.cli.context import CLIContext, pass_context
from serval.payload import HttpMethod, RequestExtras, ResponsePayload

logger = get_logger(__name__)


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (default: from configuration)',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='serval')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    Serval - JSON-API HTTP adapter.

    Sends requests to a JSON-API backend and prints normalized responses.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    effective_log_level = log_level.upper() if log_level else ctx.config.logging.level
    log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None
    setup_logging(
        level=effective_log_level,
        log_file=log_file,
        json_format=ctx.config.logging.format == "json",
    )

    if verbose:
        logger.info("cli_configured", config_path=ctx.config_path or "defaults", log_level=effective_log_level)


def _parse_headers(values: Tuple[str, ...]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition(":")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY:VALUE, got '{raw}'", param_hint="--header")
        headers[key.strip().lower()] = value.strip()
    return headers


def _report_error(payload: ResponsePayload) -> None:
    logger.warning("request_error_reported", status=payload.status, status_text=payload.status_text)


@cli.command('request')
@click.argument(
    'method',
    type=click.Choice([m.value for m in HttpMethod], case_sensitive=False),
)
@click.argument('path')
@click.option('--data', '-d', default=None, help='JSON request body')
@click.option(
    '--alternate-host',
    is_flag=True,
    help='Send to the /survey/v1 root instead of /api/v1',
)
@click.option(
    '--header',
    '-H',
    'header_values',
    multiple=True,
    help='Extra request header as KEY:VALUE (repeatable)',
)
@pass_context
def request(
    ctx: CLIContext,
    method: str,
    path: str,
    data: Optional[str],
    alternate_host: bool,
    header_values: Tuple[str, ...],
):
    """Send METHOD PATH and print the response payload."""
    body = None
    if data is not None:
        try:
            body = json.loads(data)
        except ValueError as e:
            click.echo(f"Error: --data is not valid JSON: {e}", err=True)
            sys.exit(1)

    adapter = HttpAdapter.from_config(
        ctx.config.adapter,
        on_error_callback=_report_error,
        transport=ctx.transport,
        headers=_parse_headers(header_values),
    )
    extras = RequestExtras(target_alternate_host=alternate_host)

    async def _send() -> ResponsePayload:
        async with adapter:
            return await adapter.request(HttpMethod(method.upper()), path, body, extras)

    try:
        payload = asyncio.run(_send())
    except HttpResponseError as e:
        click.echo(json.dumps(e.payload.to_dict(), indent=2))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except httpx.HTTPError as e:
        click.echo(f"Error: Request failed: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(payload.to_dict(), indent=2))


if __name__ == '__main__':
    cli()
