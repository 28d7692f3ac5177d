# MiningPoolHub balance exporter for Prometheus

from balance_exporter.utils.constants import VERSION as __version__
from balance_exporter.collector import BalanceCollector, build_metrics, scrape
from balance_exporter.api import create_app

__all__ = [
    'BalanceCollector',
    'build_metrics',
    'scrape',
    'create_app'
]
