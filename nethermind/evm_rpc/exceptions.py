class RPCError(Exception):
    """

    Raised when issues occur while building, sending, or classifying JSON-RPC requests

    """


class TransportError(RPCError):
    """Raised when the transport cannot complete a request at all (connection refused, DNS failure, etc.)"""


class ResponseParseError(RPCError):
    """
    Raised when a node response without an error marker cannot be parsed into the expected result shape.
    Typically caused by a non-JSON body, or a body missing the ``id`` or ``result`` fields.
    """


class EncodingError(Exception):
    """

    Raised when contract call parameters cannot be encoded into calldata.  The following conditions will
    result in this error being raised:

        * An ``address`` parameter is not a 20 byte hex string
        * A ``uint`` parameter is not a non-negative decimal string
        * The requested function name does not exist in the contract ABI
        * The ABI encoder rejects the supplied values for the function's input types

    """


class DecodingError(Exception):
    """

    Raised when ABI documents, calldata, or event logs cannot be decoded.  An event log whose signature is
    missing from the ABI is not an error, and is returned as an unsuccessful DecodedEvent instead.

    """
