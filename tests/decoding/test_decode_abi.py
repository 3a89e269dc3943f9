import pytest
from eth_abi import encode

from nethermind.evm_rpc.decoding.utils import decode_abi, format_decoded_value
from nethermind.evm_rpc.exceptions import DecodingError
from nethermind.evm_rpc.types.decoding import ParamKind

OWNER = "0xc0140cfc3988101a7c1ac769af92fb1ffca80f58"


def test_decode_string_and_address():
    data = "0x" + encode(["string", "address"], ["Dai Stablecoin", OWNER]).hex()

    assert decode_abi(["string", "address"], data) == ["Dai Stablecoin", OWNER]


def test_decode_int_bool_bytes():
    data = "0x" + encode(["int256", "bool", "bytes"], [-(10**20), False, b"\x00\xff"]).hex()

    assert decode_abi(["int", "bool", "bytes"], data) == ["-100000000000000000000", "false", "00ff"]


def test_unsupported_types_are_dropped():
    data = "0x" + encode(["string"], ["only me"]).hex()

    assert decode_abi(["uint256", "string", "bytes32"], data) == ["only me"]


def test_decode_without_prefix():
    data = encode(["bool"], [True]).hex()

    assert decode_abi(["bool"], data) == ["true"]


def test_decode_truncated_data():
    with pytest.raises(DecodingError):
        decode_abi(["string"], "0x0000")


def test_format_unsupported_value():
    with pytest.raises(DecodingError):
        format_decoded_value(ParamKind.unsupported, (1, 2))
