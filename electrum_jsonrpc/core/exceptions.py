# electrum_jsonrpc/core/exceptions.py

"""Error taxonomy for the Electrum JSON-RPC client

Every failure the client can produce is one of four kinds. Each kind wraps
the low-level exception that caused it and is raised with ``raise ... from``
so the chain is preserved.
"""


class ElectrumRpcError(Exception):
    """Base exception for all client errors"""

    category = "electrum rpc error"

    def __init__(self, message: str, cause: BaseException = None):
        self.message = message
        self.cause = cause
        super().__init__(self.message)

    @classmethod
    def from_cause(cls, cause: BaseException) -> "ElectrumRpcError":
        """Wrap a low-level exception into this error kind"""
        return cls(f"{cls.category}: {cause}", cause=cause)

    def __repr__(self) -> str:
        return self.message


class AddressError(ElectrumRpcError):
    """Raised when the daemon address cannot be parsed as an absolute URI"""
    category = "the provided address couldn't be parsed"


class RequestBuildError(ElectrumRpcError):
    """Raised when the outgoing HTTP request cannot be constructed"""
    category = "error while building the request"


class TransportError(ElectrumRpcError):
    """Raised when sending the request or receiving the response fails"""
    category = "error while sending the request"


class SerializationError(ElectrumRpcError):
    """Raised when the request envelope cannot be encoded to JSON"""
    category = "error while encoding json"
