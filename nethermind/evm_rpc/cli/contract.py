import logging

import click

from nethermind.evm_rpc.cli.utils import (
    abi_url_option,
    call_param_option,
    from_block_option,
    group_options,
    json_rpc_option,
    timeout_option,
    to_block_option,
    topic_option,
)

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("cli")

# isort: skip_file
# pylint: disable=too-many-arguments,import-outside-toplevel,too-many-locals


@click.group("contract", short_help="ABI driven contract calls & decoding")
def contract_group():
    """Encode contract calls and decode logs & calldata with a contract ABI"""


@contract_group.command()
@click.argument("function_name")
@click.argument("contract_address")
@group_options(json_rpc_option, abi_url_option, call_param_option, timeout_option)
def call(function_name: str, contract_address: str, json_rpc: str | None, abi_url: str | None, params, timeout: float):
    """Call FUNCTION_NAME on CONTRACT_ADDRESS and print the raw return data"""
    from nethermind.evm_rpc.cli.utils import cli_logger_config
    from nethermind.evm_rpc.contract_calls import contract_view_call
    from nethermind.evm_rpc.exceptions import EncodingError
    from nethermind.evm_rpc.rpc import RequestsTransport

    console = cli_logger_config(root_logger)
    if json_rpc is None or abi_url is None:
        raise click.UsageError("--json-rpc and --abi-url (or JSON_RPC and ABI_URL) must be set")

    try:
        result = contract_view_call(
            node_url=json_rpc,
            abi_url=abi_url,
            function_name=function_name,
            contract_address=contract_address,
            params=params,
            transport=RequestsTransport(timeout=timeout),
        )
    except EncodingError as e:
        logger.error(e)
        return

    console.print(result)


@contract_group.command()
@click.argument("address")
@group_options(json_rpc_option, abi_url_option, from_block_option, to_block_option, topic_option, timeout_option)
def logs(
    address: str,
    json_rpc: str | None,
    abi_url: str | None,
    from_block: str,
    to_block: str,
    topics: tuple[str, ...],
    timeout: float,
):
    """Fetch logs emitted by ADDRESS and decode them with the contract ABI"""
    from rich.table import Table
    from nethermind.evm_rpc.cli.utils import cli_logger_config
    from nethermind.evm_rpc.contract_calls import eth_get_logs
    from nethermind.evm_rpc.rpc import EthRpcClient, RequestsTransport

    console = cli_logger_config(root_logger)
    if json_rpc is None or abi_url is None:
        raise click.UsageError("--json-rpc and --abi-url (or JSON_RPC and ABI_URL) must be set")

    client = EthRpcClient(json_rpc, RequestsTransport(timeout=timeout))
    decoded_events = eth_get_logs(client, abi_url, from_block, to_block, address, list(topics))

    table = Table(title=f"Logs for {address}")
    table.add_column("Block")
    table.add_column("Transaction")
    table.add_column("Event")
    table.add_column("Data")
    for event in decoded_events:
        if not event.success:
            table.add_row("", "", "[red]Unknown Event", "")
            continue
        table.add_row(str(event.block_number), event.transaction_hash, event.event_name, event.data)

    console.print(table)


@contract_group.command("method-name")
@click.argument("calldata")
@group_options(abi_url_option, timeout_option)
def method_name(calldata: str, abi_url: str | None, timeout: float):
    """Resolve the function invoked by CALLDATA"""
    from nethermind.evm_rpc.cli.utils import cli_logger_config
    from nethermind.evm_rpc.contract_calls import decode_input_to_get_method_name
    from nethermind.evm_rpc.rpc import RequestsTransport

    console = cli_logger_config(root_logger)
    if abi_url is None:
        raise click.UsageError("Environment var ABI_URL or --abi-url flag must be set")

    name = decode_input_to_get_method_name(abi_url, calldata, RequestsTransport(timeout=timeout))
    console.print(name or "[yellow]No function in ABI matches selector")


@contract_group.command("method-hash")
@click.argument("calldata")
def method_hash(calldata: str):
    """Print the 4 byte function selector of CALLDATA"""
    from nethermind.evm_rpc.utils import util_get_method_hash

    click.echo(util_get_method_hash(calldata))


@contract_group.command("decode-abi")
@click.argument("data")
@click.option("--type", "-t", "types", type=str, multiple=True, required=True, help="ABI type, in order")
def decode_abi_command(data: str, types: tuple[str, ...]):
    """Decode hex DATA into strings for the given ABI types"""
    from nethermind.evm_rpc.decoding.utils import decode_abi

    for value in decode_abi(list(types), data):
        click.echo(value)
