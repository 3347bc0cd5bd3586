# electrum_jsonrpc/models/jsonrpc.py

"""JSON-RPC Response Models

Optional helpers for callers that want to interpret a daemon response. The
client itself hands back the raw HTTP response and never applies these.
"""

from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict


class RpcError(BaseModel):
    """JSON-RPC Error Object"""
    code: int
    message: str
    data: Optional[Any] = None


class RpcResponse(BaseModel):
    """JSON-RPC Response as returned by the Electrum daemon"""
    model_config = ConfigDict(extra="allow")

    result: Optional[Any] = None
    error: Optional[RpcError] = None
    id: Optional[Union[str, int]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_http(cls, response: httpx.Response) -> "RpcResponse":
        """
        Parse the body of a daemon response

        Args:
            response: Response returned by ElectrumClient

        Returns:
            Parsed response

        Raises:
            json.JSONDecodeError: If the body is not JSON
            pydantic.ValidationError: If the body is not a JSON-RPC response
        """
        return cls.model_validate(response.json())
