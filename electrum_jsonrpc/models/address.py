# electrum_jsonrpc/models/address.py

"""Wallet address value type"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    """Bitcoin wallet address

    Any string is accepted for now.
    TODO: check the address against the network's base58/bech32 encoding.
    """
    value: str

    def to_json(self) -> str:
        """Value as it is placed into request params"""
        return self.value

    def __str__(self) -> str:
        return self.value
