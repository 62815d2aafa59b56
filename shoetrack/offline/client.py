import asyncio
import logging
import aiohttp
from shoetrack.errors import TransientStoreError, error_from_payload

logger = logging.getLogger(__name__)

class ShoetrackClient:
    """Async JSON client for the shop API. Every failure surfaces as a ShoetrackError."""

    def __init__(self, base_url, password=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.password = password
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = None

    async def __aenter__(self):
        # unsafe=True keeps the session cookie when the server is addressed by IP.
        self._session = aiohttp.ClientSession(timeout=self.timeout, cookie_jar=aiohttp.CookieJar(unsafe=True))
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _request(self, method, path, payload=None, retry_auth=True):
        if self._session is None:
            raise RuntimeError('ShoetrackClient must be used as an async context manager')
        url = f"{self.base_url}{path}"
        try:
            async with self._session.request(method, url, json=payload) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise TransientStoreError('Network unavailable', 'The request will be retried when the connection is back') from e

        if status == 401 and retry_auth and self.password and path != '/api/auth/login':
            await self.login()
            return await self._request(method, path, payload, retry_auth=False)
        if status >= 400:
            raise error_from_payload(body, status)
        return body

    async def login(self):
        return await self._request('POST', '/api/auth/login', {'password': self.password}, retry_auth=False)

    async def list_products(self):
        return await self._request('GET', '/api/products')

    async def get_dashboard(self):
        return await self._request('GET', '/api/dashboard')

    async def sell_product(self, product_id, sale_price):
        body = await self._request('POST', '/api/products/sell', {'productId': product_id, 'salePrice': sale_price})
        return body['product']
