"""Loan provider feed HTTP client"""

import httpx
from typing import Any, Dict, List
from fluxd_gateway.domain.models import ExternalOffer
from fluxd_gateway.domain.exceptions import ProviderFeedError
from fluxd_gateway.config import settings


class LoanProviderClient:
    """Client for the loan provider discovery feed"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.loan_providers_url
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def get_offers(self, eligibility: Dict[str, Any]) -> List[ExternalOffer]:
        """
        Fetch offers matching a user's eligibility profile.

        The feed answers ``{"providers": [...]}``; records that are not
        objects are skipped, their text fields are not interpreted here.

        Raises:
            ProviderFeedError: On timeout, HTTP errors, or invalid response
        """
        if not self.configured:
            raise ProviderFeedError("Loan provider feed URL is not configured")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.base_url,
                    json={"eligibility": eligibility},
                )
                response.raise_for_status()
                data = response.json()

                providers = data["providers"]
                if not isinstance(providers, list):
                    raise TypeError(f"providers is {type(providers).__name__}, expected list")

                return [ExternalOffer.from_payload(p) for p in providers if isinstance(p, dict)]

            except httpx.TimeoutException as e:
                raise ProviderFeedError(f"Provider feed timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ProviderFeedError(f"Provider feed error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ProviderFeedError(f"Provider feed unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise ProviderFeedError(f"Invalid provider data from feed: {e}") from e
