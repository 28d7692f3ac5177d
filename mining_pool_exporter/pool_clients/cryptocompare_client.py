"""
CryptoCompare API Client

This module provides a client for the public CryptoCompare price API, used
to convert mined coin balances into a fiat currency.
"""

import logging
from typing import Dict, List

from pydantic import ValidationError

from .base import BaseAPIClient, DecodeError, UpstreamFetchError
from .schemas import Prices

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://min-api.cryptocompare.com"


class CryptoCompareClient(BaseAPIClient):
    """Client for the CryptoCompare ``/data/price`` endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
        max_retries: int = 0
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries
        )

    def get_prices(self, fiat: str, symbols: List[str]) -> Dict[str, float]:
        """
        Get the price of several coins in one batched request.

        The price of a symbol is expressed as units of that coin per one unit
        of ``fiat``, so an amount of coins divided by it yields fiat.

        Args:
            fiat: Currency code to convert from (e.g., "EUR")
            symbols: Coin symbols to look up

        Returns:
            Dict mapping each symbol CryptoCompare knows to its price

        Raises:
            UpstreamFetchError: If the request fails or CryptoCompare reports an error
            DecodeError: If the response is not a symbol to price mapping
        """
        if not symbols:
            return {}

        payload = self.get_json(
            endpoint="/data/price",
            params={
                "fsym": fiat,
                "tsyms": ",".join(symbols)
            }
        )

        # Errors come back with a 200 status and a Response/Message body
        if isinstance(payload, dict) and payload.get("Response") == "Error":
            raise UpstreamFetchError(f"CryptoCompare error: {payload.get('Message', 'unknown error')}")

        try:
            prices = Prices.model_validate(payload).root
        except ValidationError as e:
            raise DecodeError(f"Invalid price payload: {str(e)}") from e

        missing = [symbol for symbol in symbols if symbol not in prices]
        if missing:
            logger.warning(f"No {fiat} price for symbols: {', '.join(missing)}")

        return prices
