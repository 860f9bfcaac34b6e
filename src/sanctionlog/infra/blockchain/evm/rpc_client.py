"""EVM JSON-RPC client: fetches transaction receipts."""

import logging

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from sanctionlog.domain.models.sanction import Receipt
from sanctionlog.exceptions import ExternalServiceError, TransactionNotFoundError
from sanctionlog.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


class EVMRPCClient:
    """Minimal EVM JSON-RPC client for receipt lookups.

    Transport failures, timeouts and RPC errors raise ExternalServiceError and
    are retried up to ``max_attempts`` times with exponential backoff. A null
    receipt is not retried: it raises TransactionNotFoundError.
    """

    def __init__(
        self,
        rpc_url: str,
        http_client: RateLimitedClient,
        max_attempts: int = 1,
        retry_wait: wait_base | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._rpc_url = rpc_url
        self._http = http_client
        self._max_attempts = max_attempts
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)
        self._request_id = 0

    async def _post(self, method: str, params: list) -> dict | list | int | str | None:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        try:
            resp = await self._http.post(self._rpc_url, json=payload)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"RPC timeout ({method})") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"RPC transport error ({method}): {e}") from e

        if resp.status_code >= 400:
            raise ExternalServiceError(f"RPC HTTP {resp.status_code} ({method})")

        try:
            data = resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"RPC returned invalid JSON ({method})") from e

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"RPC error ({method}): {msg}")

        return data.get("result")

    async def _call(self, method: str, params: list) -> dict | list | int | str | None:
        """Execute a JSON-RPC call and return the result field, retrying per policy."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ExternalServiceError),
            stop=stop_after_attempt(self._max_attempts),
            wait=self._retry_wait,
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info("Retrying %s (attempt %d)", method, attempt.retry_state.attempt_number)
                return await self._post(method, params)

    async def get_transaction_receipt(self, tx_hash: str) -> Receipt:
        result = await self._call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            raise TransactionNotFoundError(tx_hash)
        if not isinstance(result, dict):
            raise ExternalServiceError(f"Unexpected receipt payload for {tx_hash}")
        return Receipt.from_rpc(result)

