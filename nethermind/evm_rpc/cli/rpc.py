import logging

import click

from nethermind.evm_rpc.cli.utils import group_options, json_rpc_option, timeout_option

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("cli")

# isort: skip_file
# pylint: disable=too-many-arguments,import-outside-toplevel,too-many-locals


def _cli_client(json_rpc: str | None, timeout: float):
    from nethermind.evm_rpc.rpc import EthRpcClient, RequestsTransport

    if json_rpc is None:
        raise click.UsageError("Environment var JSON_RPC or --json-rpc flag must be set")
    return EthRpcClient(json_rpc, RequestsTransport(timeout=timeout))


def _print_scalar(result, convert=None):
    from nethermind.evm_rpc.cli.utils import cli_logger_config

    console = cli_logger_config(root_logger)
    if result.is_error:
        logger.error(f"RPC request {result.id} failed: {result.error}")
        return
    console.print(result.result if convert is None else f"{result.result}  ({convert(result.result)})")


@click.group("rpc", short_help="Raw JSON-RPC queries")
def rpc_group():
    """Query an Ethereum node over JSON-RPC"""


@rpc_group.command("block-number")
@group_options(json_rpc_option, timeout_option)
def block_number(json_rpc: str | None, timeout: float):
    """Print the latest block number"""
    from nethermind.evm_rpc.utils import hex_to_decimal

    _print_scalar(_cli_client(json_rpc, timeout).get_latest_block_number(), hex_to_decimal)


@rpc_group.command()
@click.argument("address")
@group_options(json_rpc_option, timeout_option)
def balance(address: str, json_rpc: str | None, timeout: float):
    """Print the balance of ADDRESS at the latest block"""
    from nethermind.evm_rpc.utils import hex_to_decimal, wei_to_eth

    _print_scalar(
        _cli_client(json_rpc, timeout).get_balance(address),
        lambda wei: f"{wei_to_eth(hex_to_decimal(wei))} ETH",
    )


@rpc_group.command()
@click.argument("tx_hash")
@group_options(json_rpc_option, timeout_option)
def receipt(tx_hash: str, json_rpc: str | None, timeout: float):
    """Print the receipt for TX_HASH and its raw logs"""
    from dataclasses import asdict
    from nethermind.evm_rpc.cli.utils import cli_logger_config, rich_json

    console = cli_logger_config(root_logger)
    result = _cli_client(json_rpc, timeout).get_transaction_receipt(tx_hash)
    if result.is_error:
        logger.error(f"RPC request {result.id} failed: {result.error}")
        return

    console.print_json(rich_json(asdict(result.result)))


@rpc_group.command("send-raw")
@click.argument("signed_tx")
@group_options(json_rpc_option, timeout_option)
def send_raw(signed_tx: str, json_rpc: str | None, timeout: float):
    """Submit a signed transaction and print its hash"""
    _print_scalar(_cli_client(json_rpc, timeout).send_raw_transaction(signed_tx))
