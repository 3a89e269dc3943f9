import json

import pytest

from nethermind.evm_rpc.decoding import ContractInterface, load_contract_interface
from nethermind.evm_rpc.decoding.contract import parse_abi_document
from nethermind.evm_rpc.exceptions import DecodingError
from tests.conftest import ERC20_ABI_URL
from tests.resources.ABI import ERC20_ABI_JSON

TRANSFER_CALLDATA = (
    "0xa9059cbb"
    "000000000000000000000000ae542fc36f457426f3711747dc2340f5ac8b560f"
    "00000000000000000000000000000000000000000000000000000000000003e8"
)


@pytest.fixture(name="erc20_interface")
def fixture_erc20_interface(erc20_abi):
    return ContractInterface.from_abi(erc20_abi)


def test_interface_contents(erc20_interface):
    assert list(erc20_interface.functions.keys()) == [
        "name",
        "totalSupply",
        "balanceOf",
        "transfer",
        "transferFrom",
        "approve",
    ]
    assert [decoder.name for decoder in erc20_interface.iter_functions()] == list(erc20_interface.functions.keys())
    assert sorted(decoders[0].name for decoders in erc20_interface.events.values()) == ["Approval", "Transfer"]


@pytest.mark.parametrize(
    "calldata, method_name",
    [
        (TRANSFER_CALLDATA, "transfer"),
        (TRANSFER_CALLDATA[2:], "transfer"),
        ("0x18160ddd", "totalSupply"),
        ("0x70a08231" + "00" * 32, "balanceOf"),
        ("0xdeadbeef", ""),
    ],
)
def test_resolve_method_name(erc20_interface, calldata, method_name):
    assert erc20_interface.resolve_method_name(calldata) == method_name


@pytest.mark.parametrize("calldata", ["0x", "0xa905", ""])
def test_resolve_short_calldata(erc20_interface, calldata):
    with pytest.raises(DecodingError):
        erc20_interface.resolve_method_name(calldata)


def test_parse_abi_document():
    assert parse_abi_document(ERC20_ABI_JSON) == json.loads(ERC20_ABI_JSON)
    assert parse_abi_document(json.dumps({"contractName": "ERC20", "abi": json.loads(ERC20_ABI_JSON)})) == json.loads(
        ERC20_ABI_JSON
    )

    with pytest.raises(DecodingError):
        parse_abi_document("<html>Not Found</html>")


def test_malformed_abi():
    with pytest.raises(DecodingError):
        ContractInterface.from_abi({"type": "function"})  # type: ignore[arg-type]

    with pytest.raises(DecodingError):
        ContractInterface.from_abi([{"type": "function", "inputs": []}])

    with pytest.raises(DecodingError):
        ContractInterface.from_abi([{"type": "event", "name": "Broken", "inputs": [{"name": "a"}]}])


def test_empty_abi():
    interface = ContractInterface.from_abi([])

    assert interface.functions == {}
    assert interface.events == {}
    assert interface.resolve_method_name("0xa9059cbb") == ""


def test_load_contract_interface(static_transport):
    transport = static_transport()

    interface = load_contract_interface(ERC20_ABI_URL, transport)
    load_contract_interface(ERC20_ABI_URL, transport)

    assert interface.function("transfer").selector.hex() == "a9059cbb"
    assert transport.fetched == [ERC20_ABI_URL, ERC20_ABI_URL]
    assert not transport.executed
