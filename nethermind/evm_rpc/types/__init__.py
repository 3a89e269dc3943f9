from .decoding import CallParameter, DecodedEvent, DecodedParam, ParamKind
from .rpc import (
    BlockResult,
    EventLogRecord,
    LogArrayResult,
    RpcRequest,
    RpcResult,
    ScalarResult,
    Transaction,
    TransactionResult,
    TransportArguments,
)
