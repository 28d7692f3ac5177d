"""
MiningPoolHub API Client

This module provides a client for the MiningPoolHub account API, used to
fetch the balances of every coin mined by an account.
"""

import logging
from typing import List

from pydantic import ValidationError

from .base import BaseAPIClient, DecodeError
from .schemas import Balance, GetUserAllBalancesResponse, UserAllBalances

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://miningpoolhub.com"


class MiningPoolHubClient(BaseAPIClient):
    """
    Client for interacting with the MiningPoolHub API.

    Every call is authenticated with the account's API key, passed as the
    ``api_key`` query parameter.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
        max_retries: int = 0
    ):
        """
        Initialize the MiningPoolHub API client.

        Args:
            api_key: API key of the MiningPoolHub account
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries for failed requests

        Raises:
            ValueError: If the API key is empty
        """
        if not api_key:
            raise ValueError("API key is required")

        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries
        )
        self.api_key = api_key

    def get_user_all_balances(self) -> UserAllBalances:
        """
        Get the balances of all coins for the account.

        Returns:
            Parsed ``getuserallbalances`` body

        Raises:
            UpstreamFetchError: If the request fails
            DecodeError: If the response does not match the expected schema
        """
        payload = self.get_json(
            endpoint="/index.php",
            params={
                "page": "api",
                "action": "getuserallbalances",
                "api_key": self.api_key
            }
        )

        try:
            response = GetUserAllBalancesResponse.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"Invalid balances payload: {str(e)}") from e

        balances = response.getuserallbalances
        logger.debug(f"Fetched {len(balances.data)} balances (api version {balances.version}, runtime {balances.runtime})")
        return balances

    def get_balances(self) -> List[Balance]:
        """Get the list of per-coin balances for the account."""
        return self.get_user_all_balances().data
