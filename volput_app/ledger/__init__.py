"""Cash/collateral account replay."""

from .account import AccountLedger, build_ledger

__all__ = ["AccountLedger", "build_ledger"]
