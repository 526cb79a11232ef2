"""
Market history ingestion.

Handles the canonical observation/trade/ledger records, ingestion
validation, and the tabular and synthetic price/IV providers.
"""
