"""
Where the product catalog comes from.

DemoCatalog never touches the network; SupabaseCatalog reads the `products`
table through the hosted store's REST endpoint. select_catalog() picks one
from settings so the controller never has to check whether the store exists.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from alternative_finder.core.config import Settings
from alternative_finder.schemas.products import Product, demo_products

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    pass


class CatalogSource:
    is_demo: bool = False

    async def fetch_products(self) -> List[Product]:
        raise NotImplementedError


class DemoCatalog(CatalogSource):
    is_demo = True

    async def fetch_products(self) -> List[Product]:
        return demo_products()


class SupabaseCatalog(CatalogSource):
    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        table: str = "products",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.table = table
        self._client = client
        self.timeout = timeout

    def _headers(self) -> dict:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Accept": "application/json",
        }

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.get(
            f"{self.url}/rest/v1/{self.table}",
            params={"select": "*"},
            headers=self._headers(),
        )

    async def fetch_products(self) -> List[Product]:
        try:
            if self._client is not None:
                r = await self._get(self._client)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    r = await self._get(client)
            r.raise_for_status()
            rows = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CatalogError(f"Could not read {self.table}: {e}") from e

        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise CatalogError(f"Expected a list of rows from {self.table}, got {type(rows).__name__}")

        try:
            products = [Product.model_validate(row) for row in rows]
        except ValidationError as e:
            raise CatalogError(f"Bad row in {self.table}: {e}") from e

        logger.info("Loaded %d products from %s", len(products), self.table)
        return products


def select_catalog(cfg: Settings) -> CatalogSource:
    if cfg.is_configured:
        return SupabaseCatalog(cfg.SUPABASE_URL, cfg.SUPABASE_ANON_KEY)
    return DemoCatalog()
