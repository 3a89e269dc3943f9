import itertools
import threading
from typing import Iterable, Iterator

from nethermind.evm_rpc.exceptions import RPCError


class NonceGenerator:
    """
    Thread-safe generator of JSON-RPC request ids.  Ids start at ``start`` and increase by one with every call,
    so concurrent callers never observe the same id twice.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        """Returns the next request id"""
        with self._lock:
            return next(self._counter)


class FixedNonceGenerator(NonceGenerator):
    """
    Returns ids from a predetermined sequence.  Used to replay requests and in tests that assert on ids.
    """

    _values: Iterator[int]

    def __init__(self, values: Iterable[int]):
        super().__init__()
        self._values = iter(values)

    def next(self) -> int:
        with self._lock:
            try:
                return next(self._values)
            except StopIteration:
                raise RPCError("Fixed nonce sequence exhausted")  # pylint: disable=raise-missing-from


_PROCESS_NONCE_GENERATOR = NonceGenerator()


def default_nonce_generator() -> NonceGenerator:
    """Returns the process-wide generator shared by clients that are not given one explicitly"""
    return _PROCESS_NONCE_GENERATOR
