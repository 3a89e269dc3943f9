import json
import logging
from typing import Any, Iterator

from nethermind.evm_rpc.exceptions import DecodingError, EncodingError
from nethermind.evm_rpc.rpc.transport import Transport
from nethermind.evm_rpc.utils import to_bytes

from .event_decoders import EVMEventDecoder
from .function_decoders import EVMFunctionDecoder
from .utils import filter_events, filter_functions

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("decoding")


class ContractInterface:
    """
    In-memory interface for a single contract ABI.  Functions are grouped by name and events by their signature
    topic, both in ABI document order.  Overloaded functions & colliding event signatures always resolve to the
    first definition in the document.
    """

    functions: dict[str, list[EVMFunctionDecoder]]
    """ Function name -> all function definitions with that name """

    events: dict[bytes, list[EVMEventDecoder]]
    """ 32 byte event signature hash -> all event definitions with that signature """

    def __init__(self) -> None:
        self.functions = {}
        self.events = {}

    @classmethod
    def from_abi(cls, abi: list[dict[str, Any]]) -> "ContractInterface":
        """
        Builds a ContractInterface from a parsed ABI array.  Anonymous events are skipped, since their logs do not
        carry a signature topic.

        :param abi: Standard Ethereum ABI JSON array
        """
        if not isinstance(abi, list):
            raise DecodingError(f"Expected ABI to be a JSON array, got {type(abi).__name__}")

        interface = cls()
        try:
            for abi_function in filter_functions(abi):
                decoder = EVMFunctionDecoder(abi_function)
                interface.functions.setdefault(decoder.name, []).append(decoder)

            for abi_event in filter_events(abi):
                if abi_event.get("anonymous", False):
                    logger.debug(f"Skipping anonymous event {abi_event.get('name')}")
                    continue
                event_decoder = EVMEventDecoder(abi_event)
                interface.events.setdefault(event_decoder.signature, []).append(event_decoder)
        except (KeyError, TypeError) as e:
            raise DecodingError(f"Malformed ABI entry: {e}") from e

        logger.debug(f"Loaded ABI with {len(interface.functions)} functions and {len(interface.events)} events")
        return interface

    def function(self, name: str) -> EVMFunctionDecoder:
        """Returns the first function definition for name.  Raises EncodingError if the function does not exist"""
        try:
            return self.functions[name][0]
        except KeyError:
            raise EncodingError(f"Function {name} not found in ABI")  # pylint: disable=raise-missing-from

    def event(self, signature: bytes) -> EVMEventDecoder | None:
        """Returns the first event definition matching the signature topic, or None if no event matches"""
        decoders = self.events.get(signature)
        return decoders[0] if decoders else None

    def iter_functions(self) -> Iterator[EVMFunctionDecoder]:
        """Iterates over the first definition of every function name, in ABI order"""
        for decoders in self.functions.values():
            yield decoders[0]

    def resolve_method_name(self, calldata: str) -> str:
        """
        Resolves calldata to the name of the function it invokes by comparing the first 4 bytes against each
        function's selector.  Returns an empty string if no function matches.

        :param calldata: hex encoded calldata, 0x prefix optional
        """
        calldata_bytes = to_bytes(calldata)
        if len(calldata_bytes) < 4:
            raise DecodingError(f"Calldata {calldata!r} is shorter than a 4 byte function selector")

        selector = calldata_bytes[:4]
        for decoder in self.iter_functions():
            if decoder.selector == selector:
                return decoder.name

        logger.debug(f"No function in ABI matches selector 0x{selector.hex()}")
        return ""


def parse_abi_document(document: str) -> list[dict[str, Any]]:
    """
    Parses an ABI document.  Accepts a bare ABI array, or a compiler artifact containing an "abi" key.
    """
    try:
        parsed = json.loads(document)
    except json.JSONDecodeError as e:
        raise DecodingError("ABI document is not valid JSON") from e

    if isinstance(parsed, dict) and "abi" in parsed:
        return parsed["abi"]
    return parsed


def load_contract_interface(abi_url: str, transport: Transport) -> ContractInterface:
    """
    Fetches an ABI document through the transport and builds a ContractInterface.  The document is fetched on
    every call.

    :param abi_url: URL of the ABI document
    :param transport: Transport used to fetch the document
    """
    logger.debug(f"Fetching ABI from {abi_url}")
    return ContractInterface.from_abi(parse_abi_document(transport.fetch(abi_url)))
