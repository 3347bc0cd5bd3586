# electrum_jsonrpc/services/electrum_client.py

"""Electrum Daemon Client

Builds JSON-RPC envelopes for the Electrum wallet daemon and POSTs them with
HTTP basic auth. Every operation issues exactly one request and returns the
raw httpx.Response; reading the JSON-RPC result or error out of it is up to
the caller (see electrum_jsonrpc.models.jsonrpc.RpcResponse).
"""

import base64
import logging
import os
import secrets
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import httpx
from pydantic import ValidationError

from electrum_jsonrpc.core.config import Settings
from electrum_jsonrpc.core.exceptions import (
    AddressError,
    RequestBuildError,
    SerializationError,
    TransportError,
)
from electrum_jsonrpc.models.address import Address
from electrum_jsonrpc.models.rpc import (
    ParameterKey,
    Procedure,
    RpcBody,
    format_amount,
)

logger = logging.getLogger(__name__)

WalletPath = Union[str, os.PathLike]
Amount = Union[Decimal, int, str]


def parse_address(address: str) -> httpx.URL:
    """
    Parse the daemon base address

    Args:
        address: Absolute URI, e.g. http://127.0.0.1:7000

    Returns:
        Parsed URL

    Raises:
        AddressError: If the address is not an absolute URI
    """
    try:
        url = httpx.URL(address)
    except (httpx.InvalidURL, TypeError) as e:
        raise AddressError.from_cause(e) from e

    if not url.scheme or not url.host:
        cause = httpx.InvalidURL(f"not an absolute URI: {address!r}")
        raise AddressError.from_cause(cause) from cause

    return url


def basic_auth(login: str, password: str) -> str:
    """Authorization header value for HTTP basic auth"""
    credentials = base64.b64encode(f"{login}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {credentials}"


class ElectrumClient:
    """Async client for the Electrum daemon JSON-RPC interface

    The client keeps no per-call state, so one instance can serve many
    concurrent calls. Connection reuse is left to the httpx.AsyncClient.
    """

    def __init__(
        self,
        login: str,
        password: str,
        address: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ):
        """
        Initialize Electrum client

        Args:
            login: rpcuser configured on the daemon
            password: rpcpassword configured on the daemon
            address: Daemon base address (scheme, host, port, path)
            http_client: Optional shared httpx client; the caller keeps
                ownership of it
            timeout: Timeout for a client created here

        Raises:
            AddressError: If address is not an absolute URI
        """
        self._address = parse_address(address)
        self._auth = basic_auth(login, password)

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

        logger.info(f"ElectrumClient initialized for {self._address.host}:{self._address.port}")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "ElectrumClient":
        return cls(
            login=settings.ELECTRUM_USER,
            password=settings.ELECTRUM_PASSWORD,
            address=settings.ELECTRUM_DAEMON_ADDRESS,
            http_client=http_client,
            timeout=settings.ELECTRUM_TIMEOUT,
        )

    @property
    def address(self) -> httpx.URL:
        return self._address

    @property
    def auth(self) -> str:
        return self._auth

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it"""
        if self._owns_http_client:
            await self._http.aclose()
            logger.debug("ElectrumClient http client closed")

    # ========================================================================
    # Dispatch
    # ========================================================================

    async def call(
        self,
        procedure: Procedure,
        params: Optional[Dict[ParameterKey, Any]] = None,
        request_id: Optional[int] = None
    ) -> httpx.Response:
        """
        Send one JSON-RPC request to the daemon

        Args:
            procedure: Remote procedure to invoke
            params: Parameter values keyed by ParameterKey
            request_id: JSON-RPC id (random when omitted)

        Returns:
            The daemon's HTTP response, not interpreted

        Raises:
            SerializationError: If the envelope is invalid (e.g. a negative
                request_id) or cannot be encoded
            RequestBuildError: If the HTTP request cannot be constructed
            TransportError: If the request cannot be sent or answered
        """
        if request_id is None:
            request_id = secrets.randbits(32)

        builder = RpcBody.builder().with_id(request_id).with_procedure(procedure)
        for key, value in (params or {}).items():
            builder.with_param(key, value)
        try:
            content = builder.build().to_json()
        except ValidationError as e:
            logger.error(f"Invalid {procedure.value} envelope: {e}")
            raise SerializationError.from_cause(e) from e
        except SerializationError as e:
            logger.error(f"Failed to encode {procedure.value} request: {e}")
            raise

        try:
            request = self._http.build_request(
                "POST",
                self._address,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                    "Authorization": self._auth,
                },
                content=content,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            logger.error(f"Failed to build {procedure.value} request: {e}")
            raise RequestBuildError.from_cause(e) from e

        logger.debug(f"Calling {procedure.value} (id={request_id})")

        try:
            response = await self._http.send(request)
        except (httpx.HTTPError, RuntimeError) as e:
            # RuntimeError: the httpx client has already been closed
            logger.error(f"Request {procedure.value} (id={request_id}) failed: {type(e).__name__}: {e}")
            raise TransportError.from_cause(e) from e

        logger.debug(f"{procedure.value} (id={request_id}) answered with HTTP {response.status_code}")
        return response

    # ========================================================================
    # Node and wallet management
    # ========================================================================

    async def get_info(self) -> httpx.Response:
        return await self.call(Procedure.GET_INFO)

    async def get_balance(self) -> httpx.Response:
        return await self.call(Procedure.GET_BALANCE)

    async def list_wallets(self) -> httpx.Response:
        return await self.call(Procedure.LIST_WALLETS)

    async def load_wallet(
        self,
        wallet_path: Optional[WalletPath] = None,
        password: Optional[str] = None
    ) -> httpx.Response:
        """
        Load a wallet into the daemon

        Args:
            wallet_path: Wallet file; the daemon's default wallet when omitted
            password: Wallet password, if the wallet is encrypted
        """
        params: Dict[ParameterKey, Any] = {}
        if wallet_path is not None:
            params[ParameterKey.WALLET_PATH] = os.fspath(wallet_path)
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.LOAD_WALLET, params)

    async def close_wallet(self, wallet_path: Optional[WalletPath] = None) -> httpx.Response:
        params: Dict[ParameterKey, Any] = {}
        if wallet_path is not None:
            params[ParameterKey.WALLET_PATH] = os.fspath(wallet_path)
        return await self.call(Procedure.CLOSE_WALLET, params)

    async def create_wallet(
        self,
        wallet_path: Optional[WalletPath] = None,
        password: Optional[str] = None
    ) -> httpx.Response:
        params: Dict[ParameterKey, Any] = {}
        if wallet_path is not None:
            params[ParameterKey.WALLET_PATH] = os.fspath(wallet_path)
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.CREATE_WALLET, params)

    async def restore_wallet(
        self,
        text: str,
        wallet_path: Optional[WalletPath] = None,
        password: Optional[str] = None
    ) -> httpx.Response:
        """
        Restore a wallet

        Args:
            text: Seed phrase, master key or list of addresses/private keys
            wallet_path: Where to write the restored wallet
            password: Password for the new wallet file
        """
        params: Dict[ParameterKey, Any] = {ParameterKey.TEXT: text}
        if wallet_path is not None:
            params[ParameterKey.WALLET_PATH] = os.fspath(wallet_path)
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.RESTORE_WALLET, params)

    # ========================================================================
    # Addresses
    # ========================================================================

    async def list_addresses(self) -> httpx.Response:
        return await self.call(Procedure.LIST_ADDRESSES)

    async def get_address_history(self, address: Address) -> httpx.Response:
        return await self.call(
            Procedure.GET_ADDRESS_HISTORY,
            {ParameterKey.ADDRESS: address.to_json()}
        )

    async def get_address_balance(self, address: Address) -> httpx.Response:
        return await self.call(
            Procedure.GET_ADDRESS_BALANCE,
            {ParameterKey.ADDRESS: address.to_json()}
        )

    async def notify(self, address: Address, url: Optional[str] = None) -> httpx.Response:
        """
        Watch an address; the daemon POSTs to url when it changes

        Args:
            address: Address to watch
            url: Callback URL; omitted from the request when None
        """
        params: Dict[ParameterKey, Any] = {ParameterKey.ADDRESS: address.to_json()}
        if url is not None:
            params[ParameterKey.URL] = str(url)
        return await self.call(Procedure.NOTIFY, params)

    # ========================================================================
    # Transactions
    # ========================================================================

    async def sign_transaction(self, tx: str, password: Optional[str] = None) -> httpx.Response:
        params: Dict[ParameterKey, Any] = {ParameterKey.TX: tx}
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.SIGN_TRANSACTION, params)

    async def broadcast(self, tx: str) -> httpx.Response:
        return await self.call(Procedure.BROADCAST, {ParameterKey.TX: tx})

    async def pay_to(
        self,
        destination: Address,
        amount: Amount,
        fee: Optional[Amount] = None,
        password: Optional[str] = None
    ) -> httpx.Response:
        """
        Create a signed transaction paying amount to destination

        The transaction is returned by the daemon, not broadcast.

        Args:
            destination: Recipient address
            amount: Amount in BTC
            fee: Absolute fee in BTC; the daemon estimates one when omitted
            password: Wallet password
        """
        params: Dict[ParameterKey, Any] = {
            ParameterKey.DESTINATION: destination.to_json(),
            ParameterKey.AMOUNT: format_amount(amount),
        }
        if fee is not None:
            params[ParameterKey.FEE] = format_amount(fee)
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.PAY_TO, params)

    async def pay_to_many(
        self,
        outputs: Sequence[Tuple[Address, Amount]],
        fee: Optional[Amount] = None,
        password: Optional[str] = None
    ) -> httpx.Response:
        """
        Create a signed transaction with several outputs

        Args:
            outputs: (address, amount) pairs, sent as [["addr", "0.1"], ...]
            fee: Absolute fee in BTC
            password: Wallet password
        """
        params: Dict[ParameterKey, Any] = {
            ParameterKey.OUTPUTS: [
                [address.to_json(), format_amount(amount)] for address, amount in outputs
            ],
        }
        if fee is not None:
            params[ParameterKey.FEE] = format_amount(fee)
        if password is not None:
            params[ParameterKey.PASSWORD] = password
        return await self.call(Procedure.PAY_TO_MANY, params)

    # ========================================================================
    # Payment requests
    # ========================================================================

    async def add_payment_request(self, amount: Amount, memo: Optional[str] = None) -> httpx.Response:
        params: Dict[ParameterKey, Any] = {ParameterKey.AMOUNT: format_amount(amount)}
        if memo is not None:
            params[ParameterKey.MEMO] = memo
        return await self.call(Procedure.ADD_REQUEST, params)

    async def list_payment_requests(
        self,
        pending: bool = False,
        expired: bool = False,
        paid: bool = False
    ) -> httpx.Response:
        return await self.call(
            Procedure.LIST_REQUESTS,
            {
                ParameterKey.PENDING: pending,
                ParameterKey.EXPIRED: expired,
                ParameterKey.PAID: paid,
            }
        )

    async def remove_payment_request(self, key: str) -> httpx.Response:
        return await self.call(Procedure.REMOVE_REQUEST, {ParameterKey.KEY: key})

    async def help(self) -> httpx.Response:
        return await self.call(Procedure.HELP)
