from .contract_calls import (
    contract_view_call,
    decode_batch_logs,
    decode_input_to_get_method_name,
    decode_logs,
    eth_get_logs,
)
from .rpc import EthRpcClient, RequestsTransport
