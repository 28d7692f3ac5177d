"""
Coin identifier to trading symbol mapping.

MiningPoolHub identifies coins by name (and by algorithm for multi-algorithm
coins), while CryptoCompare expects trading symbols.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List

from pool_clients.schemas import Balance

logger = logging.getLogger(__name__)

SYMBOLS = MappingProxyType({
    "adzcoin": "ADZ",
    "auroracoin": "AUR",
    "bitcoin": "BTC",
    "bitcoin-cash": "BCH",
    "bitcoin-gold": "BTG",
    "dash": "DSH",
    "digibyte": "DGB",
    "digibyte-groestl": "DGB",
    "digibyte-skein": "DGB",
    "digibyte-qubit": "DGB",
    "ethereum": "ETH",
    "ethereum-classic": "ETC",
    "expanse": "EXP",
    "feathercoin": "FTC",
    "gamecredits": "GAME",
    "geocoin": "GEO",
    "globalboosty": "BSTY",
    "groestlcoin": "GRS",
    "litecoin": "LTC",
    "maxcoin": "MAX",
    "monacoin": "MONA",
    "monero": "XMR",
    "musicoin": "MUSIC",
    "myriadcoin": "XMY",
    "myriadcoin-skein": "XMY",
    "myriadcoin-groestl": "XMY",
    "myriadcoin-yescrypt": "XMY",
    "sexcoin": "SXC",
    "siacoin": "SC",
    "startcoin": "START",
    "verge": "XVG",
    "vertcoin": "VTC",
    "zcash": "ZEC",
    "zclassic": "ZCL",
    "zcoin": "XZC",
    "zencash": "ZEN",
})


def resolve_symbol(coin: str) -> str:
    """Return the trading symbol of a coin, or an empty string if it is unknown."""
    symbol = SYMBOLS.get(coin, "")
    if not symbol:
        logger.debug(f"No symbol known for coin {coin}")
    return symbol


def derive_symbols(balances: Iterable[Balance]) -> List[str]:
    """
    Get the symbols to request prices for.

    Unknown coins are left out, and coins sharing a symbol (e.g. the
    digibyte algorithms) only request it once.

    Args:
        balances: Balances of the account

    Returns:
        Symbols in the order their coins first appear
    """
    symbols = []
    for balance in balances:
        symbol = resolve_symbol(balance.coin)
        if symbol and symbol not in symbols:
            symbols.append(symbol)
    return symbols
