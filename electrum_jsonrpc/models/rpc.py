# electrum_jsonrpc/models/rpc.py

"""Electrum JSON-RPC Request Models

Remote procedure names, parameter keys and the request envelope sent to the
Electrum daemon. Enum member names are the identifiers used in Python code,
enum values are the names the daemon expects on the wire.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic_core import PydanticSerializationError

from electrum_jsonrpc.core.exceptions import SerializationError
from electrum_jsonrpc.models.address import Address

JSON_RPC_VERSION = 2.0
MAX_REQUEST_ID = 2**64 - 1


class Procedure(str, Enum):
    """Electrum daemon commands"""
    GET_INFO = "getinfo"
    GET_BALANCE = "getbalance"
    LIST_WALLETS = "list_wallets"
    LOAD_WALLET = "load_wallet"
    CLOSE_WALLET = "close_wallet"
    CREATE_WALLET = "create"
    RESTORE_WALLET = "restore"
    LIST_ADDRESSES = "listaddresses"
    GET_ADDRESS_HISTORY = "getaddresshistory"
    GET_ADDRESS_BALANCE = "getaddressbalance"
    SIGN_TRANSACTION = "signtransaction"
    BROADCAST = "broadcast"
    PAY_TO = "payto"
    PAY_TO_MANY = "paytomany"
    ADD_REQUEST = "add_request"
    LIST_REQUESTS = "list_requests"
    REMOVE_REQUEST = "rmrequest"
    NOTIFY = "notify"
    HELP = "help"
    EMPTY = "empty"


class ParameterKey(str, Enum):
    """Named command arguments"""
    ADDRESS = "address"
    DESTINATION = "destination"
    AMOUNT = "amount"
    FEE = "fee"
    OUTPUTS = "outputs"
    MEMO = "memo"
    PASSWORD = "password"
    WALLET_PATH = "wallet_path"
    URL = "URL"
    TEXT = "text"
    TX = "tx"
    KEY = "key"
    PENDING = "pending"
    EXPIRED = "expired"
    PAID = "paid"


def format_amount(amount: Union[Decimal, int, str]) -> str:
    """
    Render an amount as an exact decimal string

    Electrum parses amounts from strings, so they never pass through a
    binary float. Scientific notation is expanded: Decimal("1E-7") becomes
    "0.0000001".

    Args:
        amount: BTC amount

    Returns:
        Plain decimal string
    """
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return format(amount, "f")


def param_value(value: Any) -> Any:
    """Wire form of a parameter value: addresses as strings, amounts exact"""
    if isinstance(value, Address):
        return value.to_json()
    if isinstance(value, Decimal):
        return format_amount(value)
    if isinstance(value, (list, tuple)):
        return [param_value(item) for item in value]
    return value


class RpcBody(BaseModel):
    """JSON-RPC request envelope

    Field order is the order on the wire.
    """
    model_config = ConfigDict(frozen=True)

    json_rpc: float = JSON_RPC_VERSION
    id: int = Field(default=0, ge=0, le=MAX_REQUEST_ID)
    method: Procedure = Procedure.EMPTY
    params: Dict[ParameterKey, Any] = Field(default_factory=dict)

    @classmethod
    def builder(cls) -> "RpcBodyBuilder":
        return RpcBodyBuilder()

    @field_serializer("params", when_used="json")
    def serialize_params(self, params: Dict[ParameterKey, Any]) -> Dict[str, Any]:
        return {key.value: param_value(value) for key, value in params.items()}

    def to_json(self) -> str:
        """
        Serialize the envelope to a compact JSON string

        Returns:
            JSON text, e.g. {"json_rpc":2.0,"id":1,"method":"getinfo","params":{}}

        Raises:
            SerializationError: If a parameter value has no JSON representation
        """
        try:
            return self.model_dump_json()
        except PydanticSerializationError as e:
            raise SerializationError.from_cause(e) from e


class RpcBodyBuilder:
    """Accumulates envelope fields before producing an RpcBody

    No checks are made that the params fit the procedure; the daemon reports
    mismatches in its response.
    """

    def __init__(self):
        self._json_rpc = JSON_RPC_VERSION
        self._id = 0
        self._method = Procedure.EMPTY
        self._params: Dict[ParameterKey, Any] = {}

    def with_version(self, version: float) -> "RpcBodyBuilder":
        self._json_rpc = version
        return self

    def with_id(self, request_id: int) -> "RpcBodyBuilder":
        self._id = request_id
        return self

    def with_procedure(self, procedure: Procedure) -> "RpcBodyBuilder":
        self._method = procedure
        return self

    def with_param(self, key: ParameterKey, value: Any) -> "RpcBodyBuilder":
        """Set a parameter; a repeated key replaces the earlier value"""
        self._params[key] = value
        return self

    def build(self) -> RpcBody:
        """
        Produce the envelope

        Raises:
            pydantic.ValidationError: If the id is not an unsigned 64-bit integer
        """
        return RpcBody(
            json_rpc=self._json_rpc,
            id=self._id,
            method=self._method,
            params=dict(self._params),
        )
