"""
Constants shared across the balance exporter.
"""

VERSION = "0.1.0"

# Prefix of every exported metric
NAMESPACE = "miningpoolhub"

DEFAULT_FIAT = "EUR"
DEFAULT_TIMEOUT = 10
