import json
import logging
from typing import Any

from nethermind.evm_rpc.types.rpc import RpcRequest, TransportArguments
from nethermind.evm_rpc.utils import decimal_to_hex

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("rpc")

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def build_request(method: str, params: list[Any], request_id: int) -> RpcRequest:
    """
    Builds a JSON-RPC 2.0 request.  Method & params are passed through without validation.

    :param method: RPC method name, ie eth_call
    :param params: Ordered list of JSON serializable parameters
    :param request_id: id used to correlate the response with this request
    :return: RpcRequest
    """
    return RpcRequest(method=method, params=params, id=request_id)


def serialize_request(request: RpcRequest, url: str) -> TransportArguments:
    """
    Serializes a request into the arguments for a transport.  Body is of the form
    ``{"jsonrpc":"2.0","method":<method>,"params":<params>,"id":<id>}``

    :param request: RpcRequest to serialize
    :param url: Node URL the request is sent to
    :return: TransportArguments
    """
    body = json.dumps(
        {
            "jsonrpc": request.jsonrpc,
            "method": request.method,
            "params": request.params,
            "id": request.id,
        },
        separators=(",", ":"),
    )
    logger.debug(f"Serialized {request.method} request {request.id} for {url}")
    return TransportArguments(url=url, body=body, headers=dict(DEFAULT_HEADERS))


# pylint: disable=too-many-arguments
def encode_tx_call(
    to: str | None = None,
    data: str | bytes | None = None,
    from_address: str | None = None,
    gas: int | None = None,
    gas_price: int | None = None,
    value: int | None = None,
) -> dict[str, str]:
    """
    Builds the transaction object for eth_call.  Unset fields are omitted, and quantities are hex encoded.

    >>> encode_tx_call(to="0xae542fc36f457426f3711747dc2340f5ac8b560f", data=bytes.fromhex("18160ddd"))
    {'to': '0xae542fc36f457426f3711747dc2340f5ac8b560f', 'data': '0x18160ddd'}
    """
    tx_call: dict[str, str] = {}
    if from_address is not None:
        tx_call["from"] = from_address
    if to is not None:
        tx_call["to"] = to
    if gas is not None:
        tx_call["gas"] = decimal_to_hex(gas)
    if gas_price is not None:
        tx_call["gasPrice"] = decimal_to_hex(gas_price)
    if value is not None:
        tx_call["value"] = decimal_to_hex(value)
    if data is not None:
        tx_call["data"] = "0x" + data.hex() if isinstance(data, bytes) else data
    return tx_call
