"""
CoinGecko token list merge for CI.
Reconciles per-network token fragments with a baseline list and keeps only
ids the CoinGecko pricing API recognizes.

Modules:
- transformation: Fragment aggregation, baseline merge, pricing-API filter
- ingestion: CoinGecko client, HTTP connector, retry helper
- orchestration: The end-to-end merge workflow
- infrastructure: Logging, CI run context, file system
"""

__version__ = "0.1.0"
