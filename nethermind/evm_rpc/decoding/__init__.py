from .contract import ContractInterface, load_contract_interface
from .event_decoders import EVMEventDecoder
from .function_decoders import EVMFunctionDecoder, to_call_token
from .logs import decode_batch, decode_log
