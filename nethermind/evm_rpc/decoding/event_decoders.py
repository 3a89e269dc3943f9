import json
import logging
from typing import Any

from eth_typing import ABIEvent
from eth_utils import event_signature_to_log_topic

from nethermind.evm_rpc.exceptions import DecodingError
from nethermind.evm_rpc.types.decoding import DecodedParam, ParamKind

from .utils import (
    abi_to_signature,
    collapse_if_tuple,
    decode_evm_abi_from_types,
    format_decoded_value,
)

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("decoding")

# Indexed values of these types are stored in topics as the keccak hash of the value
_HASHED_TOPIC_TYPES = ("string", "bytes")


def _is_hashed_topic(abi_type: str) -> bool:
    return abi_type in _HASHED_TOPIC_TYPES or abi_type.endswith("]") or abi_type.startswith("(")


class EVMEventDecoder:
    """
    Stores precomputed data for Efficiently Decoding EVM Events
    """

    event_signature: str
    signature: bytes
    name: str
    indexed_params: int

    _param_names: list[str]
    _param_indexed: list[bool]
    _param_kinds: list[ParamKind]
    _topic_types: list[str]
    _data_types: list[str]

    def __init__(self, abi_event: ABIEvent):
        event_signature = abi_to_signature(abi_event)
        inputs = abi_event.get("inputs", [])

        self._param_names = [param.get("name", "") for param in inputs]
        self._param_indexed = [bool(param.get("indexed", False)) for param in inputs]
        self._topic_types, self._data_types, self._param_kinds = [], [], []

        for param, indexed in zip(inputs, self._param_indexed):
            abi_type = collapse_if_tuple(param)  # type: ignore[arg-type]
            if indexed and _is_hashed_topic(abi_type):
                self._topic_types.append("bytes32")
                self._param_kinds.append(ParamKind.unsupported)
                continue

            (self._topic_types if indexed else self._data_types).append(abi_type)
            self._param_kinds.append(ParamKind.from_abi_type(abi_type))

        self.event_signature = event_signature
        self.signature = event_signature_to_log_topic(event_signature)
        self.name = abi_event["name"]
        self.indexed_params = len(self._topic_types)

        if self.indexed_params > 3:
            raise DecodingError(f"Event {event_signature} declares more than 3 indexed parameters")

        logger.debug(
            f"Adding Event Decoder for {event_signature} with Topic Types: {self._topic_types} and "
            f"Data Types: {self._data_types}"
        )

    def decode(self, topics: list[bytes], data: bytes) -> list[DecodedParam]:
        """
        Decodes Event data and topics into parameters in declaration order.  Parameters of unsupported kinds
        (tuples, arrays, fixed size bytes, hashed indexed values) are omitted.

        :param topics: List of topic bytes, including the event signature at topics[0]
        :param data: ABI encoded log data
        :return: List of DecodedParam
        """
        if len(topics) - 1 != self.indexed_params:
            raise DecodingError(
                f"Event {self.event_signature} expects {self.indexed_params} indexed topics, "
                f"but log has {len(topics) - 1}"
            )

        topic_values = iter(decode_evm_abi_from_types(self._topic_types, b"".join(topics[1:])))
        data_values = iter(decode_evm_abi_from_types(self._data_types, data))

        decoded_params = []
        for name, indexed, kind in zip(self._param_names, self._param_indexed, self._param_kinds):
            value = next(topic_values) if indexed else next(data_values)
            if kind is ParamKind.unsupported:
                logger.info(f"Skipping parameter {name} of {self.event_signature} with unsupported type: {value!r}")
                continue

            decoded_params.append(DecodedParam(name=name, kind=kind, value=format_decoded_value(kind, value)))

        return decoded_params

    def id_str(self, full_signature: bool = True) -> str:
        """If full_signature is True, returns EventName(types,...) Otherwise, returns event name"""
        if full_signature:
            return self.event_signature
        return self.name


def build_json_view(params: list[DecodedParam]) -> str:
    """
    Serializes decoded parameters into a JSON object keyed by parameter name.  uint values are written as JSON
    numbers, bools as JSON booleans, and address, bytes & string values as JSON strings.  int values are not
    included in the JSON object.  Output is compact, without whitespace between tokens.

    >>> build_json_view([DecodedParam("value", ParamKind.uint, "1000"), DecodedParam("delta", ParamKind.int, "-1")])
    '{"value":1000}'
    """
    json_view: dict[str, Any] = {}
    for param in params:
        match param.kind:
            case ParamKind.uint:
                json_view[param.name] = int(param.value)
            case ParamKind.bool:
                json_view[param.name] = param.value == "true"
            case ParamKind.address | ParamKind.bytes | ParamKind.string:
                json_view[param.name] = param.value
            case ParamKind.int | ParamKind.unsupported:
                pass

    return json.dumps(json_view, separators=(",", ":"))
