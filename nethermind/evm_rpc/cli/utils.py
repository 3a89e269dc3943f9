import json
import logging
import os
from logging import Logger

import click
from rich.console import Console
from rich.logging import RichHandler

from nethermind.evm_rpc.types.decoding import CallParameter

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("cli")


def rich_json(value: dict | list) -> str:
    """Dumps JSON for printing to a rich console"""
    return json.dumps(value, indent=2)


def cli_logger_config(instrument_logger: Logger) -> Console:
    rich_console = Console()
    instrument_logger.handlers.clear()

    instrument_logger.addHandler(RichHandler(show_path=False, console=rich_console))
    instrument_logger.setLevel(logging.INFO)
    return rich_console


def group_options(*options):
    """Decorator to group multiple click options together"""

    def wrapper(function):
        for option in reversed(options):
            function = option(function)
        return function

    return wrapper


def parse_call_parameter(_ctx, _param, values: tuple[str, ...]) -> list[CallParameter]:
    """Click callback parsing ``kind:value`` strings into CallParameters"""
    call_params = []
    for value in values:
        value_type, sep, raw_value = value.partition(":")
        if not sep:
            raise click.BadParameter(f"Expected kind:value, got {value!r}")
        call_params.append(CallParameter(value_type=value_type, value=raw_value))
    return call_params


# -------------------------------------------------------
#    CLI Secrets, Connections, and Configurations
# -------------------------------------------------------
json_rpc_option = click.option(
    "--json-rpc",
    "-rpc",
    "json_rpc",
    default=lambda: os.environ.get("JSON_RPC"),
    help="Node RPC url.  If not provided, will use the JSON_RPC environment variable",
)
abi_url_option = click.option(
    "--abi-url",
    "abi_url",
    default=lambda: os.environ.get("ABI_URL"),
    help="URL of the contract ABI document.  If not provided, will use the ABI_URL environment variable",
)
timeout_option = click.option(
    "--timeout",
    "timeout",
    type=float,
    default=30,
    show_default=True,
    help="Transport timeout in seconds",
)


# -------------------------------------------------------
#    Log Filter Parameters
# -------------------------------------------------------
from_block_option = click.option(
    "--from-block",
    "-from",
    "from_block",
    default="earliest",
    type=str,
    show_default=True,
    help="Start block for log queries. Can be a hex block number, or a block identifier string like 'earliest'",
)
to_block_option = click.option(
    "--to-block",
    "-to",
    "to_block",
    default="latest",
    type=str,
    show_default=True,
    help="End block for log queries. Can be a hex block number, or a block identifier string like 'pending'",
)
topic_option = click.option(
    "--topic",
    "-t",
    "topics",
    type=str,
    multiple=True,
    help="Topic filter for log queries.  Can be input multiple times, in topic order",
)
call_param_option = click.option(
    "--param",
    "-p",
    "params",
    type=str,
    multiple=True,
    callback=parse_call_parameter,
    help="Function argument as kind:value, ie address:0x... or uint:1000.  Can be input multiple times",
)
