"""
Compose API Client

The two authenticated calls the onboarding flow needs. Failures are never
retried; POST /deployments carries no idempotency key.
"""

from typing import Any, Optional

import requests

from pronto.constants import (
    DEFAULT_API_URL,
    DEFAULT_DATACENTER,
    DEPLOYMENTS_ENDPOINT,
    USER_ENDPOINT,
)
from pronto.exceptions import DeploymentError, IdentityLookupError
from pronto.models import DeploymentRequest, DeploymentResult


def _error_detail(response: requests.Response) -> str:
    """Pull a readable reason out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("errors"):
        return f"HTTP {response.status_code}: {body['errors']}"
    text = response.text.strip()
    if text:
        return f"HTTP {response.status_code}: {text[:200]}"
    return f"HTTP {response.status_code}"


class ComposeClient:
    """Authenticated client for the Compose API."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        datacenter: str = DEFAULT_DATACENTER,
    ):
        """
        Initialize client.

        Args:
            base_url: Versioned API root, e.g. https://api.compose.io/2016-07
            session: requests session to reuse (a new one by default)
            timeout: Seconds to wait per request; None waits indefinitely
            datacenter: Region every deployment is created in
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.datacenter = datacenter

    def _headers(self, token: str) -> dict:
        return {"authorization": f"Bearer {token}", "accept": "application/json"}

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}{endpoint}"

    def fetch_account_id(self, token: str) -> str:
        """
        Resolve the account id owning the token.

        Raises:
            IdentityLookupError: On network failure, non-2xx status or a body without an id
        """
        if not token:
            raise ValueError("fetch_account_id requires a token")

        url = self._url(USER_ENDPOINT)
        try:
            response = self.session.get(
                url, headers=self._headers(token), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise IdentityLookupError("Identity lookup failed", context=str(e))

        if not response.ok:
            raise IdentityLookupError(
                "Identity lookup failed", context=_error_detail(response)
            )

        try:
            body: Any = response.json()
        except ValueError:
            raise IdentityLookupError(
                "Identity lookup failed", context="Response was not valid JSON"
            )

        account_id = body.get("id") if isinstance(body, dict) else None
        if not account_id:
            raise IdentityLookupError(
                "Identity lookup failed", context="Response did not include an account id"
            )
        return str(account_id)

    def create_deployment(
        self, token: str, account_id: str, database_type: str, name: str
    ) -> DeploymentResult:
        """
        Create a deployment.

        Args:
            token: Bearer token
            account_id: Id returned by fetch_account_id in this run
            database_type: DatabaseChoice value
            name: Deployment name

        Returns:
            DeploymentResult parsed from the response

        Raises:
            DeploymentError: On network failure, non-2xx status or a malformed body
        """
        request = DeploymentRequest(
            account_id=account_id,
            datacenter=self.datacenter,
            name=name,
            type=database_type,
        )

        url = self._url(DEPLOYMENTS_ENDPOINT)
        try:
            response = self.session.post(
                url,
                headers=self._headers(token),
                json=request.to_dict(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DeploymentError("Deployment failed", context=str(e))

        if not response.ok:
            raise DeploymentError("Deployment failed", context=_error_detail(response))

        try:
            return DeploymentResult.from_dict(response.json())
        except ValueError as e:
            raise DeploymentError("Deployment failed", context=f"Malformed response: {e}")
