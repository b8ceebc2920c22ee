# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""GraphQL executor that posts queries to an HTTP endpoint.

Usage:
    from acorn.api import GraphQLAPIExecutor
    from acorn.core.config import APIConfig

    async with GraphQLAPIExecutor(APIConfig(url="https://api.example.com/graphql")) as executor:
        result = await executor.execute_query(APIQuery("{ countries { name } }"))
"""

import base64
import json
import logging
from typing import Any, Mapping, Optional

import httpx

from acorn.api.executor import APIQueryExecutor
from acorn.core.config import APIConfig
from acorn.core.errors import AcornError
from acorn.core.models import APIQuery

logger = logging.getLogger(__name__)


class APIExecutionError(AcornError):
    """Raised when an API call fails."""
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        retryable: bool = True,
        retry_hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.retryable = retryable
        self.retry_hint = retry_hint


def classify_http_error(status_code: int) -> tuple[bool, str]:
    """
    Classify HTTP error by status code to determine retry strategy.

    Returns:
        (retryable, retry_hint) tuple
    """
    # Auth errors - NOT retryable (credentials won't change)
    if status_code == 401:
        return False, "Authentication failed. Check API credentials in config."
    if status_code == 403:
        return False, "Permission denied. The API key may lack required permissions."

    if status_code == 400:
        return True, "Bad request - check query variables and their types."
    if status_code == 404:
        return False, "Endpoint not found - check the configured GraphQL URL."
    if status_code == 429:
        return True, "Rate limited. Consider reducing request frequency or adding delays."

    # Server errors - potentially transient
    if status_code == 502:
        return True, "Bad gateway (transient). The upstream server may be temporarily unavailable."
    if status_code == 503:
        return True, "Service unavailable (transient). The API may be under maintenance or overloaded."
    if status_code == 504:
        return True, "Gateway timeout (transient). The request took too long - try simplifying the query."
    if status_code >= 500:
        return True, f"Server error {status_code} (possibly transient). Retry once."

    if status_code >= 400:
        return True, f"Client error {status_code}. Check the request parameters and format."

    return True, f"Unexpected status {status_code}."


class GraphQLAPIExecutor(APIQueryExecutor):
    """
    Executes queries against a GraphQL endpoint over HTTP.

    Handles:
    - Authentication (bearer, basic, api_key, custom headers)
    - Error handling and response parsing
    """

    def __init__(self, api_config: APIConfig, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the executor.

        Args:
            api_config: Endpoint URL, headers and credentials
            client: Optional pre-configured HTTP client (owned by the caller)
        """
        self.api_config = api_config
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.api_config.timeout_seconds)
        return self._client

    async def aclose(self):
        """Close the HTTP client if this executor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __str__(self) -> str:
        return f"GraphQLAPIExecutor({self.api_config.url})"

    def build_headers(self) -> dict[str, str]:
        """Build request headers including authentication."""
        api_config = self.api_config
        headers = {"Content-Type": "application/json"}

        # Add custom headers from config
        headers.update(api_config.headers)

        if api_config.auth_type == "bearer" and api_config.auth_token:
            headers["Authorization"] = f"Bearer {api_config.auth_token}"
        elif api_config.auth_type == "basic" and api_config.auth_username:
            credentials = f"{api_config.auth_username}:{api_config.auth_password or ''}"
            encoded = base64.b64encode(credentials.encode()).decode()
            headers["Authorization"] = f"Basic {encoded}"
        elif api_config.auth_type == "api_key" and api_config.api_key:
            headers[api_config.api_key_header] = api_config.api_key

        return headers

    async def execute_query(
        self,
        query: APIQuery,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Post a query and return the JSON-encoded 'data' portion of the response.

        Raises:
            APIExecutionError: If the request fails or returns only errors
        """
        payload: dict[str, Any] = {"query": query.query}
        if variables:
            payload["variables"] = dict(variables)

        logger.debug(f"Executing GraphQL query against {self.api_config.url}")
        try:
            response = await self.client.post(
                self.api_config.url,
                headers=self.build_headers(),
                json=payload,
            )
        except httpx.RequestError as e:
            raise APIExecutionError(f"Request to {self.api_config.url} failed: {e}") from e

        if response.status_code != 200:
            retryable, retry_hint = classify_http_error(response.status_code)
            raise APIExecutionError(
                f"GraphQL request failed with status {response.status_code}. {retry_hint}",
                status_code=response.status_code,
                response_body=response.text,
                retryable=retryable,
                retry_hint=retry_hint,
            )

        try:
            result = response.json()
        except json.JSONDecodeError as e:
            raise APIExecutionError(
                "Invalid JSON response from GraphQL API",
                response_body=response.text,
            ) from e

        # Response can have: data only (success), errors only (request error),
        # or both (partial response with field errors)
        data = result.get("data")
        errors = result.get("errors")

        if errors:
            error_str = "; ".join(e.get("message", str(e)) for e in errors)

            data_is_empty = (
                data is None
                or data == {}
                or (isinstance(data, dict) and all(
                    v is None or v == [] or v == {}
                    for v in data.values()
                ))
            )

            if data_is_empty:
                raise APIExecutionError(
                    f"GraphQL errors (no data returned): {error_str}",
                    response_body=json.dumps(result),
                )
            logger.warning(f"GraphQL partial response - errors present but data returned: {error_str}")

        return json.dumps(data if data is not None else {})
