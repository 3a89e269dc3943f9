import logging
from typing import Any, Sequence

from eth_abi import decode as eth_abi_decode
from eth_abi.exceptions import DecodingError as EthAbiDecodingError
from eth_typing import ABIEvent, ABIFunction
from eth_utils import to_normalized_address

from nethermind.evm_rpc.exceptions import DecodingError
from nethermind.evm_rpc.types.decoding import ParamKind
from nethermind.evm_rpc.utils import to_bytes

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("decoding")


def abi_to_signature(abi: ABIFunction | ABIEvent) -> str:
    """
    Converts ABI to signature.

    >>> abi_to_signature({"type": "function", "name": "transferFrom", "inputs": [
    ...     {"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}
    ... ]})
    'transferFrom(address,uint256)'

    """
    collapsed = [collapse_if_tuple(abi_input) for abi_input in abi.get("inputs", [])]
    return f"{abi['name']}({','.join(collapsed)})"


def collapse_if_tuple(abi_params: dict[str, Any]) -> str:
    """
    Converts a tuple from a dict to a parenthesized list of its types.

    >>> collapse_if_tuple(
    ...     {
    ...         'components': [
    ...             {'name': 'anAddress', 'type': 'address'},
    ...             {'name': 'anInt', 'type': 'uint256'},
    ...             {'name': 'someBytes', 'type': 'bytes'},
    ...         ],
    ...         'type': 'tuple',
    ...     }
    ... )
    '(address,uint256,bytes)'
    """

    typ = abi_params["type"]
    if not isinstance(typ, str):
        raise DecodingError(f"The 'type' must be a string, but got {typ} of type {type(typ)}")

    if not typ.startswith("tuple"):
        return typ

    delimited = ",".join(collapse_if_tuple(c) for c in abi_params["components"])
    # Whatever comes after "tuple" is the array dims.  ABI encoding rules state that
    # this will have the form "", "[]", or "[k]".
    array_dim = typ[5:]
    collapsed = f"({delimited}){array_dim}"

    return collapsed


def filter_functions(contract_abi: Sequence[dict[str, Any]]) -> list[ABIFunction]:
    """Filters out all non-function ABIs"""
    return [abi for abi in contract_abi if abi.get("type") == "function"]  # type: ignore[misc]


def filter_events(contract_abi: Sequence[dict[str, Any]]) -> list[ABIEvent]:
    """Filters out all non-event ABIs"""
    return [abi for abi in contract_abi if abi.get("type") == "event"]  # type: ignore[misc]


def decode_evm_abi_from_types(types: list[str], data: bytes) -> tuple[Any, ...]:
    """
    Decodes ABI data from types and data bytes.  Wraps eth_abi decoding errors (insufficient data bytes,
    non-empty padding, etc.) in DecodingError.

    :param types: Canonical ABI types to decode
    :param data: ABI encoded data
    :return: Tuple of decoded python values
    """
    try:
        return eth_abi_decode(types, data)
    except (EthAbiDecodingError, OverflowError) as e:
        logger.debug(f"Error decoding {data.hex()} for types {types}: {e}")
        raise DecodingError(f"Could not decode {types} from 0x{data.hex()}") from e


def format_decoded_value(kind: ParamKind, value: Any) -> str:
    """
    Formats a decoded value into its canonical string form.  Integers are kept at full width as decimal strings,
    addresses are lowercase & 0x prefixed, and bytes are lowercase hex without a prefix.

    >>> format_decoded_value(ParamKind.uint, 10**24)
    '1000000000000000000000000'
    >>> format_decoded_value(ParamKind.bool, True)
    'true'
    """
    match kind:
        case ParamKind.uint | ParamKind.int:
            return str(value)
        case ParamKind.address:
            return to_normalized_address(value)
        case ParamKind.bool:
            return "true" if value else "false"
        case ParamKind.bytes:
            return value.hex()
        case ParamKind.string:
            return value
        case ParamKind.unsupported:
            raise DecodingError(f"Cannot format value {value!r} of unsupported kind")


def _normalize_abi_type(abi_type: str) -> str:
    match abi_type:
        case "int":
            return "int256"
        case "uint":
            return "uint256"
        case _:
            return abi_type


def decode_abi(types: list[str], data: str) -> list[str]:
    """
    Decodes hex encoded ABI data into strings.  Only string, address, bytes, int, and bool types are decoded,
    all other types are dropped from the type list before decoding.

    Values are formatted with the same rules as decoded event parameters, so integers are decimal strings and
    addresses are lowercase & 0x prefixed.  This deliberately differs from the unprefixed hex that ethabi style
    token display produces for int and address values.

    >>> decode_abi(["bool", "int"], "0x" + "00" * 31 + "01" + "ff" * 32)
    ['true', '-1']

    :param types: ABI types, ie ["string", "address"]
    :param data: hex encoded data
    :return: List of formatted values
    """
    supported = [
        _normalize_abi_type(typ)
        for typ in types
        if typ in ("string", "address", "bytes", "bool", "int", "int256")
    ]
    decoded = decode_evm_abi_from_types(supported, to_bytes(data))
    return [format_decoded_value(ParamKind.from_abi_type(typ), value) for typ, value in zip(supported, decoded)]
