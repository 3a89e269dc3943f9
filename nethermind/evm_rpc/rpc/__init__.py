from .client import EthRpcClient
from .nonce import FixedNonceGenerator, NonceGenerator, default_nonce_generator
from .transport import RequestsTransport, Transport
