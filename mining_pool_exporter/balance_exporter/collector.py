"""
Prometheus collector for MiningPoolHub balances.

Every scrape fetches the account balances, fetches the fiat prices of the
mined coins and turns both into gauges. Nothing is kept between scrapes:
each request builds its own registry, collector and HTTP clients.
"""

import logging
import math
from typing import Dict, List, Optional

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from pool_clients import APIClientError, CryptoCompareClient, MiningPoolHubClient
from pool_clients.schemas import Balance
from balance_exporter.config import Settings
from balance_exporter.symbols import derive_symbols, resolve_symbol
from balance_exporter.utils.constants import NAMESPACE, VERSION

logger = logging.getLogger(__name__)

BALANCE_LABELS = ["coin", "symbol", "wallet", "status"]


def convert(amount: float, price: Optional[float]) -> Optional[float]:
    """
    Convert a coin amount into fiat.

    Args:
        amount: Amount of coins
        price: Units of the coin per one unit of fiat

    Returns:
        The fiat value, or None when there is no usable price
    """
    if price is None or not math.isfinite(price) or price <= 0:
        return None
    return amount / price


def build_metrics(balances: List[Balance], prices: Dict[str, float]) -> List[GaugeMetricFamily]:
    """
    Build the metric families for one scrape.

    Raw balances are always exported. Converted balances are only exported
    for coins with a known symbol and a positive price.

    Args:
        balances: Balances of the account
        prices: Price table keyed by symbol

    Returns:
        The info, balance and converted balance families
    """
    info = GaugeMetricFamily(
        f"{NAMESPACE}_info",
        "Info about this exporter",
        labels=["version"]
    )
    info.add_metric([VERSION], 1)

    balance_gauge = GaugeMetricFamily(
        f"{NAMESPACE}_balance",
        "Balances by coin, wallet and confirmation status",
        labels=BALANCE_LABELS
    )
    converted_gauge = GaugeMetricFamily(
        f"{NAMESPACE}_balance_converted",
        "Balances converted to fiat by coin, wallet and confirmation status",
        labels=BALANCE_LABELS
    )

    for balance in balances:
        symbol = resolve_symbol(balance.coin)
        price = prices.get(symbol) if symbol else None
        if symbol and price is None:
            logger.debug(f"No price for {symbol}, skipping converted balances of {balance.coin}")

        for wallet, status, amount in balance.wallets():
            labels = [balance.coin, symbol, wallet, status]
            balance_gauge.add_metric(labels, amount)

            converted = convert(amount, price)
            if converted is not None:
                converted_gauge.add_metric(labels, converted)

    return [info, balance_gauge, converted_gauge]


class BalanceCollector:
    """
    Custom collector exporting the balances of one MiningPoolHub account.

    A failure of either upstream call is logged and the scrape yields no
    metrics at all.
    """

    def __init__(self, fiat: str, pool_client: MiningPoolHubClient, price_client: CryptoCompareClient):
        self.fiat = fiat
        self.pool_client = pool_client
        self.price_client = price_client

    def describe(self):
        # Keeps registration from triggering a scrape
        return []

    def collect(self):
        try:
            balances = self.pool_client.get_balances()
        except APIClientError as e:
            logger.error(f"Couldn't fetch balances: {str(e)}")
            return

        symbols = derive_symbols(balances)

        try:
            prices = self.price_client.get_prices(self.fiat, symbols)
        except APIClientError as e:
            logger.error(f"Couldn't fetch prices: {str(e)}")
            return

        logger.info(f"Collected {len(balances)} balances with {len(prices)} {self.fiat} prices")
        yield from build_metrics(balances, prices)


def scrape(api_key: str, fiat: str, settings: Settings) -> bytes:
    """
    Run one scrape and render it in the Prometheus text format.

    Args:
        api_key: API key of the MiningPoolHub account
        fiat: Currency to convert balances into
        settings: Upstream URLs, timeout and retry settings

    Returns:
        Exposition text, empty if an upstream call failed

    Raises:
        ValueError: If the API key is empty
    """
    if not api_key:
        raise ValueError("apikey must be provided")

    registry = CollectorRegistry()
    with MiningPoolHubClient(
        api_key=api_key,
        base_url=settings.pool_url,
        timeout=settings.timeout,
        max_retries=settings.max_retries
    ) as pool_client, CryptoCompareClient(
        base_url=settings.price_url,
        timeout=settings.timeout,
        max_retries=settings.max_retries
    ) as price_client:
        registry.register(BalanceCollector(fiat, pool_client, price_client))
        return generate_latest(registry)
