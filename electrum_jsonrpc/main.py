# electrum_jsonrpc/main.py

"""Command Line Entry Point

Calls one argument-free procedure on the configured daemon and prints the
HTTP status and body. Handy for checking credentials and connectivity:

    python -m electrum_jsonrpc.main getinfo
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from electrum_jsonrpc.core.config import Settings
from electrum_jsonrpc.core.exceptions import ElectrumRpcError
from electrum_jsonrpc.core.logging import get_logger, setup_logging
from electrum_jsonrpc.models.rpc import Procedure
from electrum_jsonrpc.services.electrum_client import ElectrumClient

logger = get_logger(__name__)

# Procedures that take no arguments
SIMPLE_PROCEDURES = {
    Procedure.GET_INFO.value: "get_info",
    Procedure.GET_BALANCE.value: "get_balance",
    Procedure.LIST_WALLETS.value: "list_wallets",
    Procedure.LOAD_WALLET.value: "load_wallet",
    Procedure.CLOSE_WALLET.value: "close_wallet",
    Procedure.LIST_ADDRESSES.value: "list_addresses",
    Procedure.LIST_REQUESTS.value: "list_payment_requests",
    Procedure.HELP.value: "help",
}


async def run(settings: Settings, procedure: str) -> int:
    """
    Call a procedure and print the response

    Returns:
        Process exit code
    """
    try:
        async with ElectrumClient.from_settings(settings) as client:
            response = await getattr(client, SIMPLE_PROCEDURES[procedure])()
    except ElectrumRpcError as e:
        logger.error(str(e))
        return 1

    print(f"status: {response.status_code}")
    print(response.text)
    return 0 if response.is_success else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Call the Electrum daemon JSON-RPC interface")
    parser.add_argument(
        "procedure",
        nargs="?",
        default=Procedure.HELP.value,
        choices=sorted(SIMPLE_PROCEDURES),
        help="procedure to call (default: help)"
    )
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings)
    logger.info(f"Electrum daemon: {settings.ELECTRUM_DAEMON_ADDRESS}")

    return asyncio.run(run(settings, args.procedure))


if __name__ == "__main__":
    sys.exit(main())
