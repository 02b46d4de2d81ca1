"""
Address Book - persisted record of deployed contracts

Layout on disk:
    {
      "MAINNET": {"GovernanceTokenProxy": "0x...", ...},
      "LOCALHOST": {...}
    }

Usage:
    book = AddressBook.load()
    token = book.get("MAINNET", "GovernanceTokenProxy")
    book.update("MAINNET", {"RewardDistributor": distributor.address})

Each (network, contract name) pair maps to one current address.
Overwriting an entry is an upgrade and is logged; nothing is ever removed.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from web3 import Web3

from infrastructure.config import get_config
from infrastructure.errors import NotFoundError, ValidationError

logger = logging.getLogger("AddressBook")


class AddressBook:
    """Network -> contract name -> deployed address, backed by a JSON file."""

    def __init__(self, path: Union[str, Path], entries: Dict[str, Dict[str, str]] = None):
        self.path = Path(path)
        self._entries: Dict[str, Dict[str, str]] = entries or {}

    # ===========================================
    # LOADING
    # ===========================================

    @classmethod
    def load(cls, path: Union[str, Path, None] = None) -> "AddressBook":
        """Read the book; a missing file is an empty book."""
        path = Path(path or get_config().paths.address_book)
        if not path.exists():
            logger.info(f"No address book at {path}, starting empty")
            return cls(path)

        with open(path, "r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Address book {path} is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise ValidationError(f"Address book {path} must be a JSON object")

        entries = {}
        for network, contracts in raw.items():
            if not isinstance(contracts, dict):
                raise ValidationError(f"Address book entry for {network} must be an object")
            entries[network.upper()] = {
                name: cls._normalize(address) for name, address in contracts.items()
            }
        return cls(path, entries)

    @staticmethod
    def _normalize(address: str) -> str:
        if not isinstance(address, str) or not Web3.is_address(address):
            raise ValidationError(f"Invalid address: {address!r}")
        return Web3.to_checksum_address(address)

    # ===========================================
    # LOOKUPS
    # ===========================================

    def get(self, network: str, name: str) -> str:
        try:
            return self._entries[network.upper()][name]
        except KeyError:
            raise NotFoundError("Deployed address", f"{name} on {network.upper()}") from None

    def find(self, network: str, name: str) -> Optional[str]:
        return self._entries.get(network.upper(), {}).get(name)

    def has(self, network: str, name: str) -> bool:
        return self.find(network, name) is not None

    def network(self, network: str) -> Dict[str, str]:
        return dict(self._entries.get(network.upper(), {}))

    def networks(self):
        return sorted(self._entries)

    # ===========================================
    # UPDATES
    # ===========================================

    def update(self, network: str, deploy_data: Dict[str, str]) -> None:
        """Merge newly deployed addresses for a network and persist."""
        network = network.upper()
        section = self._entries.setdefault(network, {})

        for name, address in deploy_data.items():
            address = self._normalize(address)
            previous = section.get(name)
            if previous and previous != address:
                logger.warning(f"[{network}] {name} upgraded: {previous} -> {address}")
            section[name] = address

        self.save()
        logger.info(f"[{network}] Recorded {', '.join(deploy_data)} in {self.path}")

    def save(self) -> None:
        """Atomic write: temp file in the same directory, then replace."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._entries, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {network: dict(contracts) for network, contracts in self._entries.items()}


def get_deployed_address(name: str, network: str, path: Union[str, Path, None] = None) -> str:
    """Shortcut for scripts that only need one lookup."""
    return AddressBook.load(path).get(network, name)


def update_deploy_jsons(network: str, deploy_data: Dict[str, str], path: Union[str, Path, None] = None) -> AddressBook:
    book = AddressBook.load(path)
    book.update(network, deploy_data)
    return book
