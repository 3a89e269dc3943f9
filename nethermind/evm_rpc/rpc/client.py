import logging
from typing import Any, Callable, TypeVar

from nethermind.evm_rpc.types.rpc import (
    BlockResult,
    LogArrayResult,
    RpcResult,
    ScalarResult,
    TransactionResult,
)

from .envelope import build_request, serialize_request
from .nonce import NonceGenerator, default_nonce_generator
from .responses import (
    classify_block,
    classify_logs,
    classify_scalar,
    classify_transaction,
)
from .transport import Transport

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("rpc")

Result = TypeVar("Result", bound=RpcResult)


class EthRpcClient:
    """
    JSON-RPC client for an Ethereum compatible node.  Every method sends exactly one request through the transport,
    blocks until it returns, and classifies the raw response into a typed result.  Requests are never retried.
    """

    url: str
    """ Node URL requests are sent to """

    transport: Transport
    """ Transport performing network I/O """

    nonce_generator: NonceGenerator
    """ Source of request ids.  Defaults to the process-wide generator """

    def __init__(self, url: str, transport: Transport, nonce_generator: NonceGenerator | None = None):
        self.url = url
        self.transport = transport
        self.nonce_generator = nonce_generator or default_nonce_generator()

    def request(self, method: str, params: list[Any], classifier: Callable[[str, int], Result]) -> Result:
        """
        Sends a single request and classifies the response.

        :param method: RPC method name
        :param params: RPC parameters
        :param classifier: Response classifier for the expected result shape
        """
        request_id = self.nonce_generator.next()
        args = serialize_request(build_request(method, params, request_id), self.url)

        logger.debug(f"Sending {method} with id {request_id} to {self.url}")
        response = self.transport.execute(args)

        return classifier(response, request_id)

    def eth_call(self, tx_call: dict[str, str], tag: str = "latest") -> ScalarResult:
        """
        Executes a read-only contract call.  Result is the raw hex return data.

        :param tx_call: Transaction call object, see :func:`~nethermind.evm_rpc.rpc.envelope.encode_tx_call`
        :param tag: Block tag or hex block number
        """
        return self.request("eth_call", [tx_call, tag], classify_scalar)

    def get_transaction_receipt(self, tx_hash: str) -> TransactionResult:
        """Fetches a transaction receipt, including its logs"""
        return self.request("eth_getTransactionReceipt", [tx_hash], classify_transaction)

    def get_latest_block_number(self) -> ScalarResult:
        """Fetches the latest block number as a hex quantity"""
        return self.request("eth_blockNumber", [], classify_scalar)

    def get_block_by_number(self, block_in_hex: str) -> BlockResult:
        """Fetches a block with hydrated transactions"""
        return self.request("eth_getBlockByNumber", [block_in_hex, True], classify_block)

    def send_raw_transaction(self, signed_tx: str) -> ScalarResult:
        """Submits a signed transaction.  Result is the transaction hash"""
        return self.request("eth_sendRawTransaction", [signed_tx], classify_scalar)

    def get_balance(self, address: str) -> ScalarResult:
        """Fetches the wei balance of an address at the latest block as a hex quantity"""
        return self.request("eth_getBalance", [address, "latest"], classify_scalar)

    def get_logs(
        self,
        start_block_in_hex: str,
        end_block_in_hex: str,
        address: str,
        topics: list[str] | None = None,
    ) -> LogArrayResult:
        """
        Fetches raw logs emitted by address within a block range.

        :param start_block_in_hex: First block of the range, hex or block tag
        :param end_block_in_hex: Last block of the range, hex or block tag
        :param address: Contract address emitting the logs
        :param topics: Topic filters
        """
        log_filter = {
            "fromBlock": start_block_in_hex,
            "toBlock": end_block_in_hex,
            "address": address,
            "topics": topics or [],
        }
        return self.request("eth_getLogs", [log_filter], classify_logs)
