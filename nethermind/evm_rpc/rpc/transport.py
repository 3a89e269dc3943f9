import logging
from typing import Protocol

import requests

from nethermind.evm_rpc.exceptions import TransportError
from nethermind.evm_rpc.types.rpc import TransportArguments

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("transport")


class Transport(Protocol):
    """
    Synchronous capability that performs network I/O.  Used both for JSON-RPC requests and for fetching ABI
    documents.  Implementations return the raw response text, which may be empty, and raise TransportError
    if the request could not be completed.  Timeouts & retries are the responsibility of the implementation.
    """

    def execute(self, args: TransportArguments) -> str:
        """Sends a serialized JSON-RPC request and returns the raw response body"""
        raise NotImplementedError()

    def fetch(self, url: str) -> str:
        """Fetches a document by URL and returns its raw text"""
        raise NotImplementedError()


class RequestsTransport:
    """
    Transport backed by a :class:`requests.Session`.  Requests are sent exactly once.
    """

    timeout: float
    session: requests.Session

    def __init__(self, timeout: float = 30, headers: dict[str, str] | None = None):
        self.timeout = timeout
        self.session = requests.Session()
        if headers:
            self.session.headers.update(headers)

    def execute(self, args: TransportArguments) -> str:
        logger.debug(f"{args.http_method} {args.url} -- {args.body}")
        try:
            response = self.session.request(
                args.http_method,
                args.url,
                data=args.body,
                headers=args.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Request to {args.url} failed: {e}")
            raise TransportError(f"Request to {args.url} failed") from e

        return response.text

    def fetch(self, url: str) -> str:
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch document {url}: {e}")
            raise TransportError(f"Failed to fetch document {url}") from e

        return response.text
