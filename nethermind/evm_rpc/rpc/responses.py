import json
import logging
from typing import Any, Callable, TypeVar

from nethermind.evm_rpc.exceptions import ResponseParseError
from nethermind.evm_rpc.types.rpc import (
    JSON_RPC_VERSION,
    BlockResult,
    EventLogRecord,
    LogArrayResult,
    RpcResult,
    ScalarResult,
    Transaction,
    TransactionResult,
)
from nethermind.evm_rpc.utils import hex_to_decimal

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("rpc")

TRANSPORT_FAILURE_CODE = -32700
ERROR_MARKER = "error"

Result = TypeVar("Result", bound=RpcResult)

# Node response keys -> Transaction fields
_TRANSACTION_FIELDS = {
    "blockHash": "block_hash",
    "blockNumber": "block_number",
    "from": "from_address",
    "gas": "gas",
    "gasPrice": "gas_price",
    "hash": "hash",
    "input": "input",
    "nonce": "nonce",
    "to": "to",
    "transactionIndex": "transaction_index",
    "value": "value",
}


def transport_failure_body(request_id: int) -> str:
    """
    Synthetic JSON-RPC error returned in place of an empty transport response.  Carries code -32700 and the id
    of the request that failed.
    """
    return json.dumps(
        {
            "jsonrpc": JSON_RPC_VERSION,
            "id": request_id,
            "error": {"code": TRANSPORT_FAILURE_CODE, "message": "Transport connection failed"},
        },
        separators=(",", ":"),
    )


def _load_body(raw_text: str) -> dict[str, Any]:
    try:
        body = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {raw_text[:200]!r}") from e

    if not isinstance(body, dict):
        raise ResponseParseError(f"Expected JSON-RPC response object, got {type(body).__name__}")
    return body


def _response_id(body: dict[str, Any]) -> int:
    try:
        return int(body["id"])
    except KeyError:
        raise ResponseParseError(f"Response missing id field: {body}")  # pylint: disable=raise-missing-from
    except (TypeError, ValueError) as e:
        raise ResponseParseError(f"Response id is not an integer: {body['id']!r}") from e


def _classify(
    raw_text: str,
    request_id: int,
    result_class: type[Result],
    parse_result: Callable[[Any], Any],
) -> Result:
    if not raw_text:
        logger.error(f"Empty response for request {request_id}")
        raw_text = transport_failure_body(request_id)

    # Any occurrence of the word error classifies the whole body as an error, even inside a result string
    if ERROR_MARKER in raw_text:
        body = _load_body(raw_text)
        logger.debug(f"Error response for request {request_id}: {raw_text}")
        return result_class(id=_response_id(body), error=raw_text)

    body = _load_body(raw_text)
    if "result" not in body:
        raise ResponseParseError(f"Response missing result field: {raw_text[:200]!r}")

    response_id = _response_id(body)
    if response_id != request_id:
        raise ResponseParseError(f"Response id {response_id} does not match request id {request_id}")

    return result_class(id=response_id, result=parse_result(body["result"]))


def _optional_str(value: Any) -> str:
    return "" if value is None else str(value)


def parse_log(log: dict[str, Any]) -> EventLogRecord:
    """
    Parses a log object from eth_getLogs or a receipt into an EventLogRecord.  Block numbers are converted from
    hex to integers, and a missing block number is returned as 0.
    """
    if not isinstance(log, dict):
        raise ResponseParseError(f"Expected log object, got {log!r}")

    block_number = log.get("blockNumber")
    return EventLogRecord(
        topics=list(log.get("topics") or []),
        data=_optional_str(log.get("data")),
        transaction_hash=_optional_str(log.get("transactionHash")),
        block_number=hex_to_decimal(block_number) if block_number else 0,
    )


def parse_transaction(transaction: dict[str, Any]) -> Transaction:
    """
    Parses a transaction or receipt object into a Transaction.  Receipts carry transactionHash instead of hash,
    and the nested logs are parsed into EventLogRecords.
    """
    if not isinstance(transaction, dict):
        raise ResponseParseError(f"Expected transaction object, got {transaction!r}")

    fields = {attr: _optional_str(transaction.get(key)) for key, attr in _TRANSACTION_FIELDS.items()}
    if not fields["hash"]:
        fields["hash"] = _optional_str(transaction.get("transactionHash"))

    return Transaction(
        **fields,
        logs=[parse_log(log) for log in transaction.get("logs") or []],
    )


def _parse_scalar(result: Any) -> str:
    if not isinstance(result, str):
        raise ResponseParseError(f"Expected string result, got {result!r}")
    return result


def _parse_block(result: Any) -> list[Transaction]:
    if not isinstance(result, dict) or not isinstance(result.get("transactions"), list):
        raise ResponseParseError("Expected block object with a transactions array")
    return [parse_transaction(tx) for tx in result["transactions"]]


def _parse_logs(result: Any) -> list[EventLogRecord]:
    if not isinstance(result, list):
        raise ResponseParseError(f"Expected array of logs, got {type(result).__name__}")
    return [parse_log(log) for log in result]


def classify_scalar(raw_text: str, request_id: int) -> ScalarResult:
    """Classifies a response whose result is a bare string"""
    return _classify(raw_text, request_id, ScalarResult, _parse_scalar)


def classify_transaction(raw_text: str, request_id: int) -> TransactionResult:
    """Classifies a response whose result is a single transaction or receipt"""
    return _classify(raw_text, request_id, TransactionResult, parse_transaction)


def classify_block(raw_text: str, request_id: int) -> BlockResult:
    """Classifies an eth_getBlockByNumber response with hydrated transactions"""
    return _classify(raw_text, request_id, BlockResult, _parse_block)


def classify_logs(raw_text: str, request_id: int) -> LogArrayResult:
    """Classifies an eth_getLogs response"""
    return _classify(raw_text, request_id, LogArrayResult, _parse_logs)
