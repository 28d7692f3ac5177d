"""
Data schemas for API responses.

This module defines Pydantic models for validating the MiningPoolHub
``getuserallbalances`` payload and the CryptoCompare price payload.
"""

from typing import Dict, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class Balance(BaseModel):
    """
    Balance of a single coin on a MiningPoolHub account.

    ``ae_*`` fields hold the auto-exchange wallet, ``exchange`` holds funds
    waiting on the exchange.
    """
    model_config = ConfigDict(frozen=True)

    coin: str
    confirmed: float = 0.0
    unconfirmed: float = 0.0
    ae_confirmed: float = 0.0
    ae_unconfirmed: float = 0.0
    exchange: float = 0.0

    def wallets(self) -> List[Tuple[str, str, float]]:
        """Return ``(wallet, status, amount)`` for every balance this coin reports."""
        return [
            ("normal", "confirmed", self.confirmed),
            ("normal", "unconfirmed", self.unconfirmed),
            ("auto", "confirmed", self.ae_confirmed),
            ("auto", "unconfirmed", self.ae_unconfirmed),
            ("exchange", "confirmed", self.exchange),
        ]


class UserAllBalances(BaseModel):
    """Body of the ``getuserallbalances`` API action."""
    version: str = ""
    runtime: float = 0.0
    data: List[Balance] = Field(default_factory=list)


class GetUserAllBalancesResponse(BaseModel):
    """Envelope returned by ``index.php?page=api&action=getuserallbalances``."""
    getuserallbalances: UserAllBalances


class Prices(RootModel[Dict[str, float]]):
    """
    Prices returned by CryptoCompare's ``/data/price`` endpoint.

    Keys are coin symbols, values are units of that coin per one unit of the
    requested fiat currency.
    """

    @field_validator("root")
    @classmethod
    def validate_symbols(cls, v):
        if any(not symbol for symbol in v):
            raise ValueError("Price table contains an empty symbol")
        return v
