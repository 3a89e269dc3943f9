from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

JSON_RPC_VERSION = "2.0"

ResultT = TypeVar("ResultT")


@dataclass(frozen=True)
class RpcRequest:
    """JSON-RPC 2.0 Request.  The id is assigned once when the request is built"""

    method: str
    params: list[Any]
    id: int
    jsonrpc: str = JSON_RPC_VERSION


@dataclass(frozen=True)
class TransportArguments:
    """Everything a transport needs to deliver a serialized request"""

    url: str
    body: str
    headers: dict[str, str] = field(default_factory=lambda: {"Content-Type": "application/json"})
    http_method: str = "POST"


@dataclass(frozen=True)
class EventLogRecord:
    """
    Raw event log as returned by eth_getLogs or nested inside a transaction receipt.  topics[0] is the
    event signature hash when present.
    """

    topics: list[str]
    data: str
    transaction_hash: str
    block_number: int


@dataclass
class Transaction:
    """Transaction or Receipt returned by the node.  Missing fields are returned as empty strings"""

    block_hash: str = ""
    block_number: str = ""
    from_address: str = ""
    gas: str = ""
    gas_price: str = ""
    hash: str = ""
    input: str = ""
    nonce: str = ""
    to: str = ""
    transaction_index: str = ""
    value: str = ""
    logs: list[EventLogRecord] = field(default_factory=list)


@dataclass
class RpcResult(Generic[ResultT]):
    """
    Typed JSON-RPC Response.  Exactly one of result & error is populated.  If the node returned an error,
    error holds the raw response body verbatim.
    """

    id: int
    result: ResultT | None = None
    error: str = ""
    jsonrpc: str = JSON_RPC_VERSION

    @property
    def is_error(self) -> bool:
        """True if the response carried an error payload"""
        return bool(self.error)


class ScalarResult(RpcResult[str]):
    """Result is a bare string, ie a hex quantity or a transaction hash"""


class TransactionResult(RpcResult[Transaction]):
    """Result is a single transaction or transaction receipt"""


class BlockResult(RpcResult[list[Transaction]]):
    """Result is the list of hydrated transactions contained in a block"""


class LogArrayResult(RpcResult[list[EventLogRecord]]):
    """Result is a list of event logs"""
