"""
Mining Pool API Clients

This package provides API clients for the MiningPoolHub account API and the
CryptoCompare price API.
"""

from .base import APIClientError, DecodeError, UpstreamFetchError
from .miningpoolhub_client import MiningPoolHubClient
from .cryptocompare_client import CryptoCompareClient

__all__ = [
    'MiningPoolHubClient',
    'CryptoCompareClient',
    'APIClientError',
    'UpstreamFetchError',
    'DecodeError'
]
