import logging
from typing import Any, Callable, Sequence

from eth_abi import encode as eth_abi_encode
from eth_abi.exceptions import ABITypeError
from eth_abi.exceptions import EncodingError as EthAbiEncodingError
from eth_typing import ABIFunction
from eth_utils import function_signature_to_4byte_selector, is_hex_address, to_checksum_address

from nethermind.evm_rpc.exceptions import DecodingError, EncodingError
from nethermind.evm_rpc.types.decoding import CallParameter

from .utils import abi_to_signature, collapse_if_tuple, decode_evm_abi_from_types

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("decoding")

UINT256_MAX = 2**256 - 1


class EVMFunctionDecoder:
    """
    Represents a single EVM function.  Precomputes the canonical signature & 4 byte selector, and encodes or
    decodes calldata for the function's input types.
    """

    name: str
    function_signature: str
    selector: bytes

    input_types: list[str]
    _input_names: list[str]
    _formatters: dict[str, Callable[[Any], Any]] = {}

    def __init__(self, abi_function: ABIFunction):
        self.name = abi_function["name"]

        inputs = abi_function.get("inputs", [])
        self.input_types = [collapse_if_tuple(param) for param in inputs]  # type: ignore[arg-type]
        self._input_names = [param.get("name", "") for param in inputs]

        self.function_signature = abi_to_signature(abi_function)
        self.selector = function_signature_to_4byte_selector(self.function_signature)
        self._formatters = {"address": to_checksum_address}

    def encode_input(self, values: Sequence[Any]) -> bytes:
        """
        Encodes the function selector followed by the ABI encoded arguments.

        :param values: Python values for each input, in declaration order
        :return: calldata bytes
        """
        if len(values) != len(self.input_types):
            raise EncodingError(
                f"{self.function_signature} expects {len(self.input_types)} arguments, got {len(values)}"
            )
        logger.debug(f"Encoding {self.function_signature} with arguments {list(values)}")
        try:
            return self.selector + eth_abi_encode(self.input_types, list(values))
        except (EthAbiEncodingError, ABITypeError, TypeError, ValueError, OverflowError) as e:
            raise EncodingError(f"Could not encode {values} for {self.function_signature}") from e

    def decode_input(self, calldata: bytes) -> dict[str, Any]:
        """
        Decodes calldata for this function into a dictionary keyed by input name.

        :param calldata: selector followed by ABI encoded arguments
        """
        if calldata[:4] != self.selector:
            raise DecodingError(f"Calldata selector 0x{calldata[:4].hex()} does not match {self.function_signature}")

        decoded = decode_evm_abi_from_types(self.input_types, calldata[4:])
        return dict(zip(self._input_names, self.apply_formatters(decoded), strict=True))

    def apply_formatters(self, decoding_result: Sequence[Any]) -> list[Any]:
        """
        Applies loaded formatters to decoded inputs.  Addresses are returned checksummed regardless of the
        case eth_abi decodes them in.

        :param decoding_result: Values returned from ABI decoding, in input order
        """
        formatted_values = []
        for value, typ in zip(decoding_result, self.input_types, strict=True):
            formatter = self._formatters.get(typ)
            formatted_values.append(formatter(value) if formatter is not None else value)

        return formatted_values

    def id_str(self, full_signature: bool = True) -> str:
        """
        Returns ID string for function.  If full_signature is True, returns the function name & parameter types.
        If full_signature is false, returns function name
        """
        if full_signature:
            return self.function_signature
        return self.name


def to_call_token(param: CallParameter) -> Any:
    """
    Converts a CallParameter into a value for ABI encoding.  ``address`` values are parsed as 20 byte addresses,
    ``uint`` values as unsigned decimal integers, and every other tag is passed through as a string.

    >>> to_call_token(CallParameter("uint", "1000000000000000000000000"))
    1000000000000000000000000
    """
    match param.value_type:
        case "address":
            if not is_hex_address(param.value):
                raise EncodingError(f"Invalid address parameter: {param.value!r}")
            return to_checksum_address(param.value)
        case "uint":
            if not param.value.isascii() or not param.value.isdigit():
                raise EncodingError(f"Invalid uint parameter, expected decimal string: {param.value!r}")
            value = int(param.value)
            if value > UINT256_MAX:
                raise EncodingError(f"uint parameter exceeds 256 bits: {param.value}")
            return value
        case _:
            return param.value
