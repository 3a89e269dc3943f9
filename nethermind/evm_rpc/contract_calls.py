import logging

from eth_utils import is_hex_address, to_checksum_address

from nethermind.evm_rpc.decoding import (
    decode_batch,
    decode_log,
    load_contract_interface,
    to_call_token,
)
from nethermind.evm_rpc.exceptions import EncodingError
from nethermind.evm_rpc.rpc import EthRpcClient, NonceGenerator, Transport
from nethermind.evm_rpc.rpc.envelope import encode_tx_call
from nethermind.evm_rpc.types.decoding import CallParameter, DecodedEvent
from nethermind.evm_rpc.types.rpc import EventLogRecord

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("contract")

# pylint: disable=too-many-arguments


def contract_view_call(
    node_url: str,
    abi_url: str,
    function_name: str,
    contract_address: str,
    params: list[CallParameter],
    transport: Transport,
    nonce_generator: NonceGenerator | None = None,
) -> str:
    """
    Encodes a call to a named contract function and executes it with eth_call against the latest block.  The raw
    hex return data is returned without decoding.  If the node returns an error, an empty string is returned.

    :param node_url: Node URL
    :param abi_url: URL of the contract ABI document
    :param function_name: Function to call.  Overloads resolve to the first definition in the ABI
    :param contract_address: 0x prefixed contract address
    :param params: Function arguments in declaration order
    :param transport: Transport used for both the ABI fetch and the RPC request
    :param nonce_generator: Source of request ids
    """
    interface = load_contract_interface(abi_url, transport)
    function = interface.function(function_name)

    if not is_hex_address(contract_address):
        raise EncodingError(f"Invalid contract address: {contract_address!r}")

    calldata = function.encode_input([to_call_token(param) for param in params])
    tx_call = encode_tx_call(to=to_checksum_address(contract_address), data=calldata)

    client = EthRpcClient(node_url, transport, nonce_generator)
    result = client.eth_call(tx_call, "latest")
    if result.is_error:
        logger.error(f"eth_call to {contract_address}.{function_name} failed: {result.error}")

    return result.result or ""


def decode_logs(abi_url: str, record: EventLogRecord, transport: Transport) -> DecodedEvent:
    """Fetches the ABI document and decodes a single log"""
    return decode_log(record, load_contract_interface(abi_url, transport))


def decode_batch_logs(abi_url: str, records: list[EventLogRecord], transport: Transport) -> list[DecodedEvent]:
    """Fetches the ABI document once, and decodes every log in the batch with it"""
    return decode_batch(records, load_contract_interface(abi_url, transport))


def decode_input_to_get_method_name(abi_url: str, calldata: str, transport: Transport) -> str:
    """
    Fetches the ABI document and resolves the function name invoked by calldata.  Returns an empty string if no
    function matches the selector.
    """
    return load_contract_interface(abi_url, transport).resolve_method_name(calldata)


def eth_get_logs(
    client: EthRpcClient,
    abi_url: str,
    start_block_in_hex: str,
    end_block_in_hex: str,
    address: str,
    topics: list[str] | None = None,
) -> list[DecodedEvent]:
    """
    Fetches logs with eth_getLogs and decodes them with the contract ABI.  If the node returns an error, the error
    is logged and an empty list is returned.

    :param client: EthRpcClient connected to the node
    :param abi_url: URL of the contract ABI document
    :param start_block_in_hex: First block of the range
    :param end_block_in_hex: Last block of the range
    :param address: Contract address emitting the logs
    :param topics: Topic filters
    """
    log_result = client.get_logs(start_block_in_hex, end_block_in_hex, address, topics)
    if log_result.is_error:
        logger.error(f"eth_getLogs for {address} failed: {log_result.error}")

    return decode_batch_logs(abi_url, log_result.result or [], client.transport)
