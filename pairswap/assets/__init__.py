"""Asset-ledger collaborator interface and in-memory implementation."""

from pairswap.assets.ledger import AssetLedger, InMemoryAssetLedger, ledger_from_env

__all__ = ["AssetLedger", "InMemoryAssetLedger", "ledger_from_env"]
