from dataclasses import dataclass, field
from enum import Enum

# pylint: disable=invalid-name


class ParamKind(Enum):
    """
    Semantic kind of a decoded ABI value.  ``unsupported`` covers tuples, arrays, fixed size bytes and any
    other type that is skipped when formatting decoded events.
    """

    uint = "uint"
    int = "int"
    address = "address"
    bool = "bool"
    bytes = "bytes"
    string = "string"
    unsupported = "unsupported"

    @classmethod
    def from_abi_type(cls, abi_type: str) -> "ParamKind":
        """
        Maps a canonical ABI type to its kind.

        >>> ParamKind.from_abi_type("uint256")
        <ParamKind.uint: 'uint'>
        >>> ParamKind.from_abi_type("bytes32")
        <ParamKind.unsupported: 'unsupported'>
        """
        if abi_type.endswith("]") or abi_type.startswith("(") or abi_type.startswith("tuple"):
            return cls.unsupported

        if abi_type.startswith("uint"):
            return cls.uint
        if abi_type.startswith("int"):
            return cls.int

        match abi_type:
            case "address":
                return cls.address
            case "bool":
                return cls.bool
            case "bytes":
                return cls.bytes
            case "string":
                return cls.string
            case _:
                return cls.unsupported


@dataclass(frozen=True)
class DecodedParam:
    """Single decoded event parameter.  Numeric values are kept as decimal strings"""

    name: str
    kind: ParamKind
    value: str


@dataclass
class DecodedEvent:
    """Event Decoding Result"""

    event_name: str
    params: list[DecodedParam] = field(default_factory=list)
    success: bool = False
    error_msg: str = ""

    data: str = "null"
    """ JSON object keyed by parameter name, serialized to text """

    block_number: int = 0
    transaction_hash: str = ""


@dataclass
class CallParameter:
    """Contract call argument.  value_type is one of 'address', 'uint', or any other tag for string values"""

    value_type: str
    value: str
