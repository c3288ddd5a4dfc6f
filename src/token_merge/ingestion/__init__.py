"""
Ingestion layer: the CoinGecko lookup and the retry helper it runs under.
"""
