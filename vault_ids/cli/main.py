"""
vault_ids.cli.main
==================

`vault-ids` — derive vault cap/allocation identifiers from the command line.

Examples
--------
    $ vault-ids adapter 0xAcd4fFdBABDc627e5474FA9d507Db1436CF65Cc7
    $ vault-ids collateral 0xcbB7C0000aB88B473b1f5aFd9ef808440eed33Bf
    $ vault-ids market <adapter> <loan> <collateral> <oracle> <irm> 860000000000000000
    $ vault-ids market-data <loan> <collateral> <oracle> <irm> 860000000000000000
    $ vault-ids --json adapter 0x...
    $ vault-ids                     # worked examples

Configuration
-------------
- Output format : `--json` / `--text` or env `VAULT_IDS_OUTPUT` (default: text)
- Logging       : `--verbose/-v` (DEBUG) or env `VAULT_IDS_LOG_LEVEL` / `VAULT_IDS_LOG_FORMAT`
- Addresses     : env `VAULT_IDS_STRICT_CHECKSUM`, `VAULT_IDS_CHECKSUM_OUTPUT`

Results go to stdout; logs and errors go to stderr. Any validation or usage
error exits with status 1.
"""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

import click
import typer

from .. import logging as vlog
from ..abi.types import parse_uint
from ..address import parse_address
from ..config import load_config
from ..errors import UsageError, VaultIdsError
from ..examples import build_examples
from ..ids import MarketParams, adapter_id, collateral_id, encode_market_params, market_id
from ..version import __version__
from . import render

log = vlog.get_logger("vault_ids.cli")

app = typer.Typer(
    name="vault-ids",
    help="Derive vault cap and allocation identifiers (keccak256 of abi.encode).",
    add_completion=False,
    context_settings={
        "help_option_names": ["-h", "--help"],
        # command words are matched case-insensitively
        "token_normalize_func": lambda token: token.lower(),
    },
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    json_output: bool
    checksum_output: bool


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


@contextmanager
def _reporting(ctx: typer.Context, command: str) -> Iterator[Ctx]:
    """Bind the log context for one command and turn library errors into exit 1."""
    c: Ctx = ctx.obj
    vlog.bind(command=command)
    try:
        yield c
    except VaultIdsError as e:
        log.debug("command failed", extra={"code": e.to_dict()["code"]})
        if c.json_output:
            typer.echo(json.dumps({"error": e.to_dict()}), err=True)
        else:
            typer.echo(f"error: {e.message}", err=True)
        raise typer.Exit(1) from e
    finally:
        vlog.unbind("command")


def _market_params(loan: str, collateral: str, oracle: str, irm: str, lltv: str) -> MarketParams:
    return MarketParams(
        loan_token=parse_address(loan),
        collateral_token=parse_address(collateral),
        oracle=parse_address(oracle),
        irm=parse_address(irm),
        lltv=parse_uint(lltv, bits=256, field="lltv"),
    )


def _emit_examples(c: Ctx) -> None:
    examples = build_examples()
    if c.json_output:
        _print_json({"examples": [render.example_payload(e) for e in examples]})
        return
    typer.echo("Vault identifier examples (Base)")
    typer.echo("")
    typer.echo("\n\n".join(render.render_example(e, c.checksum_output) for e in examples))
    typer.echo("")
    typer.echo("Run `vault-ids help` for usage.")


# --- Root callback -----------------------------------------------------------


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    json_output: Optional[bool] = typer.Option(
        None,
        "--json/--text",
        help="Emit one JSON object instead of text (env VAULT_IDS_OUTPUT).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    """
    Derive vault cap and allocation identifiers.

    With no command, print worked examples.
    """
    cfg = load_config()
    vlog.configure(json=cfg.json_logs, level="DEBUG" if verbose else cfg.log_level)
    ctx.obj = Ctx(
        json_output=cfg.json_output if json_output is None else json_output,
        checksum_output=cfg.checksum_output,
    )
    log.debug("config", extra=cfg.as_dict())
    if ctx.invoked_subcommand is None:
        _emit_examples(ctx.obj)


# --- Commands ----------------------------------------------------------------


@app.command("adapter")
def adapter(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Adapter contract address (0x...)."),
) -> None:
    """Adapter id: keccak256(abi.encode("this", adapter))."""
    with _reporting(ctx, "adapter") as c:
        addr = parse_address(address)
        result = adapter_id(addr)
        if c.json_output:
            _print_json(render.id_payload(result, {"address": addr}))
        else:
            shown = render.display_address(addr, c.checksum_output)
            typer.echo(render.render_id("ADAPTER ID", result, render.adapter_call(shown)))


@app.command("collateral")
def collateral(
    ctx: typer.Context,
    address: str = typer.Argument(..., help="Collateral token address (0x...)."),
) -> None:
    """Collateral id: keccak256(abi.encode("collateralToken", token))."""
    with _reporting(ctx, "collateral") as c:
        addr = parse_address(address)
        result = collateral_id(addr)
        if c.json_output:
            _print_json(render.id_payload(result, {"address": addr}))
        else:
            shown = render.display_address(addr, c.checksum_output)
            typer.echo(render.render_id("COLLATERAL ID", result, render.collateral_call(shown)))


@app.command("market")
def market(
    ctx: typer.Context,
    adapter_address: str = typer.Argument(..., metavar="ADAPTER", help="Market adapter address."),
    loan_token: str = typer.Argument(..., metavar="LOAN_TOKEN"),
    collateral_token: str = typer.Argument(..., metavar="COLLATERAL_TOKEN"),
    oracle: str = typer.Argument(..., metavar="ORACLE"),
    irm: str = typer.Argument(..., metavar="IRM"),
    lltv: str = typer.Argument(..., metavar="LLTV", help="18-decimal integer, e.g. 860000000000000000."),
) -> None:
    """Market id: keccak256(abi.encode("this/marketParams", adapter, marketParams))."""
    with _reporting(ctx, "market") as c:
        addr = parse_address(adapter_address)
        params = _market_params(loan_token, collateral_token, oracle, irm, lltv)
        result = market_id(addr, params)
        if c.json_output:
            _print_json(render.id_payload(result, {"adapter": addr}, params))
        else:
            shown = render.display_address(addr, c.checksum_output)
            typer.echo(
                render.render_id(
                    "MARKET ID", result, render.market_call(shown), params, c.checksum_output
                )
            )


@app.command("market-data")
def market_data(
    ctx: typer.Context,
    loan_token: str = typer.Argument(..., metavar="LOAN_TOKEN"),
    collateral_token: str = typer.Argument(..., metavar="COLLATERAL_TOKEN"),
    oracle: str = typer.Argument(..., metavar="ORACLE"),
    irm: str = typer.Argument(..., metavar="IRM"),
    lltv: str = typer.Argument(..., metavar="LLTV"),
) -> None:
    """Market data: abi.encode(marketParams), the allocate/deallocate payload."""
    with _reporting(ctx, "market-data") as c:
        params = _market_params(loan_token, collateral_token, oracle, irm, lltv)
        data = encode_market_params(params)
        if c.json_output:
            _print_json(render.market_data_payload(data, params))
        else:
            typer.echo(render.render_market_data(data, params, c.checksum_output))


@app.command("examples")
def examples(ctx: typer.Context) -> None:
    """Print worked examples for a Base deployment."""
    with _reporting(ctx, "examples") as c:
        _emit_examples(c)


@app.command("help")
def help_() -> None:
    """Print usage."""
    typer.echo(render.USAGE)


@app.command("version")
def version(ctx: typer.Context) -> None:
    """Print the package version."""
    c: Ctx = ctx.obj
    if c.json_output:
        _print_json({"version": __version__})
    else:
        typer.echo(f"vault-ids {__version__}")


# --- Entrypoints -------------------------------------------------------------


def _with_typer_copy(click_cls: type, typer_cls: type) -> Tuple[type, ...]:
    """
    `click_cls` plus its counterpart in the exception hierarchy typer raises.
    Newer typer releases bundle their own click, whose classes share names
    with click's but not identity.
    """
    found = {c for c in typer_cls.__mro__ if c.__name__ == click_cls.__name__}
    return tuple({click_cls} | found)


_EXIT_ERRORS = _with_typer_copy(click.exceptions.Exit, typer.Exit)
_ABORT_ERRORS = _with_typer_copy(click.exceptions.Abort, typer.Abort)
_CLICK_ERRORS = _with_typer_copy(click.exceptions.ClickException, typer.BadParameter)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        rv = app(prog_name="vault-ids", standalone_mode=False, args=argv)
        return rv if isinstance(rv, int) else 0
    except _EXIT_ERRORS as e:
        return int(e.exit_code)
    except _ABORT_ERRORS:
        typer.echo("aborted", err=True)
        return 1
    except _CLICK_ERRORS as e:
        err = UsageError(e.format_message())
        log.debug("usage error", extra={"code": err.to_dict()["code"]})
        typer.echo(f"error: {err.message}", err=True)
        typer.echo("", err=True)
        typer.echo(render.USAGE, err=True)
        return 1
    except VaultIdsError as e:
        typer.echo(f"error: {e.message}", err=True)
        return 1


def run(argv: Optional[List[str]] = None) -> int:
    """Alias for :func:`main` (console-script target)."""
    return main(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
