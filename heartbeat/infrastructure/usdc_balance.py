"""USDC Balance Reader — reads a wallet's on-chain USDC via JSON-RPC eth_call.

Invariants:
    - One HTTP request per get_usdc_balance call, no retries
    - Returned balance is in whole USDC (raw uint256 / 10**6), always >= 0
    - All failures mapped to BalanceRetrievalError (core/errors.py) with a reason:
      invalid_address, unsupported_network, timeout, connection, http_status,
      rpc_error, malformed_response

Design Decisions:
    - Raw eth_call over a web3 SDK: balanceOf is one selector and one hex word
    - Fresh httpx.AsyncClient per call: one call per heartbeat cycle, no pool to manage
    - transport injectable: tests use httpx.MockTransport instead of a live node
"""

import logging
import re

import httpx

from heartbeat.config import HeartbeatConfig, get_settings
from heartbeat.core.domain_types import Network
from heartbeat.core.errors import BalanceRetrievalError, ErrorContext

logger = logging.getLogger(__name__)

USDC_DECIMALS = 6

USDC_CONTRACTS: dict[Network, str] = {
    Network.BASE: "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
    Network.BASE_SEPOLIA: "0x036CbD53842c5426634e7929541eC2318f3dCF7e",
}

DEFAULT_RPC_URLS: dict[Network, str] = {
    Network.BASE: "https://mainnet.base.org",
    Network.BASE_SEPOLIA: "https://sepolia.base.org",
}

# keccak256("balanceOf(address)")[:4]
_BALANCE_OF_SELECTOR = "0x70a08231"
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_HEX_WORD_RE = re.compile(r"^0x[0-9a-fA-F]{1,64}$")


def encode_balance_of(address: str) -> str:
    """Calldata for balanceOf(address): selector + address left-padded to 32 bytes."""
    return _BALANCE_OF_SELECTOR + address[2:].lower().rjust(64, "0")


class UsdcBalanceReader:
    """Reads USDC balances from one network through one JSON-RPC endpoint."""

    def __init__(
        self,
        rpc_url: str | None = None,
        network: Network | str = Network.BASE,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.network = network
        self.rpc_url = rpc_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: HeartbeatConfig | None = None) -> "UsdcBalanceReader":
        settings = settings or get_settings()
        return cls(
            rpc_url=settings.rpc_url,
            network=settings.network,
            timeout_seconds=settings.rpc_timeout_seconds,
        )

    async def get_usdc_balance(self, address: str) -> float:
        """Fetch the USDC balance of `address`. Raises BalanceRetrievalError."""
        context = ErrorContext(wallet_address=address, network=str(getattr(
            self.network, "value", self.network,
        )))
        contract, rpc_url = self._resolve_endpoint(context)
        if not isinstance(address, str) or not _ADDRESS_RE.match(address):
            raise BalanceRetrievalError(
                "wallet address must be 0x followed by 40 hex characters",
                "invalid_address", context=context,
            )

        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_call",
            "params": [
                {"to": contract, "data": encode_balance_of(address)},
                "latest",
            ],
        }
        body = await self._post(rpc_url, payload, context)
        raw = self._parse_result(body, context)
        balance = raw / 10 ** USDC_DECIMALS
        logger.debug(
            f"USDC balance for {address}: {balance:.6f}",
            extra={"wallet_address": address, "network": context.network},
        )
        return balance

    def _resolve_endpoint(self, context: ErrorContext) -> tuple[str, str]:
        try:
            network = Network(self.network)
        except ValueError:
            raise BalanceRetrievalError(
                f"no USDC contract known for network {self.network!r}",
                "unsupported_network", context=context,
            )
        return USDC_CONTRACTS[network], self.rpc_url or DEFAULT_RPC_URLS[network]

    async def _post(self, rpc_url: str, payload: dict, context: ErrorContext) -> dict:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(rpc_url, json=payload)
                response.raise_for_status()
                return response.json()

        except httpx.TimeoutException as e:
            raise BalanceRetrievalError(
                f"RPC request timed out after {self.timeout_seconds}s",
                "timeout", context=context,
            ) from e

        except httpx.HTTPStatusError as e:
            raise BalanceRetrievalError(
                f"RPC endpoint returned HTTP {e.response.status_code}",
                "http_status", context=context,
            ) from e

        except httpx.TransportError as e:
            raise BalanceRetrievalError(
                f"RPC endpoint unreachable: {e}", "connection", context=context,
            ) from e

        except ValueError as e:
            raise BalanceRetrievalError(
                "RPC response is not valid JSON", "malformed_response",
                context=context,
            ) from e

    def _parse_result(self, body: object, context: ErrorContext) -> int:
        if not isinstance(body, dict):
            raise BalanceRetrievalError(
                "RPC response is not a JSON object", "malformed_response",
                context=context,
            )
        if body.get("error") is not None:
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else error
            context.debug_info = {"rpc_error": error}
            raise BalanceRetrievalError(
                f"eth_call rejected: {message}", "rpc_error", context=context,
            )
        result = body.get("result")
        if not isinstance(result, str) or not _HEX_WORD_RE.match(result):
            raise BalanceRetrievalError(
                f"eth_call returned {result!r}, expected one hex word",
                "malformed_response", context=context,
            )
        return int(result, 16)
