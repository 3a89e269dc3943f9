import pytest

from nethermind.evm_rpc.exceptions import ResponseParseError, RPCError
from nethermind.evm_rpc.rpc import EthRpcClient
from tests.conftest import NODE_URL
from tests.resources.rpc_responses import (
    BLOCK_NUMBER_RESPONSE,
    BLOCK_RESPONSE,
    LOGS_RESPONSE,
    RPC_ERROR_RESPONSE,
    TRANSACTION_RECEIPT_RESPONSE,
    TRANSFER_TOPIC,
    TX_HASH,
    block_number_response,
)

DAI_ADDRESS = "0x6b175474e89094c44da98b954eedeac495271d0f"


def test_get_latest_block_number(static_transport, fixed_nonces):
    transport = static_transport(BLOCK_NUMBER_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(7))

    result = client.get_latest_block_number()

    assert result.result == "0x10d4f"
    assert transport.executed[0].url == NODE_URL
    assert transport.executed[0].http_method == "POST"
    assert transport.executed[0].body == '{"jsonrpc":"2.0","method":"eth_blockNumber","params":[],"id":7}'


def test_requests_use_successive_ids(static_transport, fixed_nonces):
    transport = static_transport(*[block_number_response(request_id) for request_id in (1, 2, 3)])
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(1, 2, 3))

    results = [client.get_latest_block_number() for _ in range(3)]

    assert [body["id"] for body in transport.sent_bodies()] == [1, 2, 3]
    assert [result.id for result in results] == [1, 2, 3]


def test_default_nonce_generator_increases(static_transport):
    transport = static_transport(block_number_response, block_number_response)
    client = EthRpcClient(NODE_URL, transport)

    client.get_latest_block_number()
    client.get_latest_block_number()

    first, second = transport.sent_bodies()
    assert second["id"] > first["id"]


def test_eth_call(static_transport, fixed_nonces):
    transport = static_transport('{"jsonrpc":"2.0","id":1,"result":"0x0000000000000000000000000000000000000001"}')
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(1))

    result = client.eth_call({"to": DAI_ADDRESS, "data": "0x18160ddd"})

    assert result.result == "0x0000000000000000000000000000000000000001"
    assert transport.sent_bodies()[0] == {
        "jsonrpc": "2.0",
        "method": "eth_call",
        "params": [{"to": DAI_ADDRESS, "data": "0x18160ddd"}, "latest"],
        "id": 1,
    }


def test_get_transaction_receipt(static_transport, fixed_nonces):
    transport = static_transport(TRANSACTION_RECEIPT_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(11))

    result = client.get_transaction_receipt(TX_HASH)

    assert transport.sent_bodies()[0]["method"] == "eth_getTransactionReceipt"
    assert transport.sent_bodies()[0]["params"] == [TX_HASH]
    assert result.result.hash == TX_HASH
    assert result.result.logs[0].topics[0] == TRANSFER_TOPIC


def test_get_block_by_number(static_transport, fixed_nonces):
    transport = static_transport(BLOCK_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(5))

    result = client.get_block_by_number("0x1b4")

    assert transport.sent_bodies()[0]["method"] == "eth_getBlockByNumber"
    assert transport.sent_bodies()[0]["params"] == ["0x1b4", True]
    assert len(result.result) == 2


def test_send_raw_transaction(static_transport, fixed_nonces):
    transport = static_transport(f'{{"jsonrpc":"2.0","id":2,"result":"{TX_HASH}"}}')
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(2))

    result = client.send_raw_transaction("0xf86c0a8502540be400")

    assert transport.sent_bodies()[0]["method"] == "eth_sendRawTransaction"
    assert transport.sent_bodies()[0]["params"] == ["0xf86c0a8502540be400"]
    assert result.result == TX_HASH


def test_get_balance(static_transport, fixed_nonces):
    transport = static_transport('{"jsonrpc":"2.0","id":4,"result":"0xde0b6b3a7640000"}')
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(4))

    result = client.get_balance(DAI_ADDRESS)

    assert transport.sent_bodies()[0]["params"] == [DAI_ADDRESS, "latest"]
    assert result.result == "0xde0b6b3a7640000"


def test_get_logs(static_transport, fixed_nonces):
    transport = static_transport(LOGS_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(9))

    result = client.get_logs("0x5daf3b", "0x5daf3c", DAI_ADDRESS, [TRANSFER_TOPIC])

    assert transport.sent_bodies()[0]["params"] == [
        {"fromBlock": "0x5daf3b", "toBlock": "0x5daf3c", "address": DAI_ADDRESS, "topics": [TRANSFER_TOPIC]}
    ]
    assert len(result.result) == 2


def test_node_error_is_returned(static_transport, fixed_nonces):
    transport = static_transport(RPC_ERROR_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(3))

    result = client.get_balance(DAI_ADDRESS)

    assert result.is_error
    assert result.error == RPC_ERROR_RESPONSE
    assert result.result is None


def test_empty_response_carries_request_id(static_transport, fixed_nonces):
    transport = static_transport("")
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(42))

    result = client.get_latest_block_number()

    assert result.is_error
    assert result.id == 42
    assert '"code":-32700' in result.error


def test_exhausted_nonces_send_nothing(static_transport, fixed_nonces):
    transport = static_transport(BLOCK_NUMBER_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces())

    with pytest.raises(RPCError):
        client.get_latest_block_number()

    assert not transport.executed


def test_response_for_another_request(static_transport, fixed_nonces):
    transport = static_transport(BLOCK_NUMBER_RESPONSE)
    client = EthRpcClient(NODE_URL, transport, fixed_nonces(8))

    with pytest.raises(ResponseParseError):
        client.get_latest_block_number()
