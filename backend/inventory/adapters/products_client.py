from typing import Dict, Optional

import httpx

from inventory.errors import RemoteUnavailableError
from inventory.utils.logging import get_logger

log = get_logger("inventory.products_client")


class ProductsClient:
    """
    Long-lived async HTTP client for the products service.

    Built once per process with the service base URL and a bounded timeout.
    Every failure mode (connection error, timeout, non-2xx status, undecodable
    body) is reported as RemoteUnavailableError; callers decide whether that
    is fatal.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def get_product(self, product_id: int) -> Dict:
        try:
            resp = await self._client.get(f"/api/productos/{product_id}")
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailableError(
                f"products service answered {e.response.status_code} for product {product_id}"
            )
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(
                f"products service unreachable: {type(e).__name__}: {e}"
            )
        except ValueError as e:
            raise RemoteUnavailableError(f"invalid product payload: {e}")

    async def get_stock(self, product_id: int) -> int:
        product = await self.get_product(product_id)
        try:
            return int(product["stock"])
        except (KeyError, TypeError, ValueError):
            raise RemoteUnavailableError(
                f"product {product_id} payload has no usable stock field"
            )

    async def patch_stock(self, product_id: int, new_stock: int) -> None:
        """Absolute set of the product's stock counter (not a delta)."""
        try:
            resp = await self._client.patch(
                f"/api/productos/{product_id}/stock", json=new_stock
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailableError(
                f"products service rejected stock={new_stock} for product {product_id}: "
                f"{e.response.status_code} {e.response.text}"
            )
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(
                f"products service unreachable: {type(e).__name__}: {e}"
            )
        log.debug(f"patch_stock(): product_id={product_id} stock={new_stock}")

    async def health_check(self) -> bool:
        try:
            resp = await self._client.get("/api/health")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    async def aclose(self):
        await self._client.aclose()
