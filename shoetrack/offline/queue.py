"""Client-side buffering of sales made while the shop API is unreachable.

A queued sale is shown right away as one unit less stock in the local product
view. The view is always derived from the last product snapshot the server
sent, minus the sales it has not confirmed yet, so it is reconciled both when
a sale goes through and when it fails for good.
"""
import asyncio
import logging
from shoetrack.constants import PendingSaleStatus
from shoetrack.errors import ShoetrackError, TransientStoreError, NotFoundError, OutOfStockError

logger = logging.getLogger(__name__)

class OfflineSaleQueue:
    def __init__(self, storage, client, max_attempts=3):
        self.storage = storage
        self.client = client
        self.max_attempts = max_attempts
        self.products = []
        self.stats = None
        self.is_cached = False
        self.cached_at = None
        self._snapshots = {}
        self._drain_lock = asyncio.Lock()
        self._recover_interrupted()

    def _recover_interrupted(self):
        # The server may or may not have seen these; never resubmit blindly.
        for sale in self.storage.get_pending_sales():
            if sale['status'] == PendingSaleStatus.SYNCING:
                logger.warning(f"Pending sale {sale['id']} was interrupted mid-sync; marking failed")
                self.storage.update_sale(sale['id'], status=PendingSaleStatus.FAILED, lastError='interrupted')

    @property
    def pending_count(self):
        return len(self.storage.get_pending_sales())

    @property
    def failed_count(self):
        return sum(1 for s in self.storage.get_pending_sales() if s['status'] == PendingSaleStatus.FAILED)

    def _find(self, product_id):
        for p in self.products:
            if str(p.get('id')) == str(product_id):
                return p
        return None

    def _unconfirmed(self, product_id):
        return sum(
            1 for s in self.storage.get_pending_sales()
            if str(s['productId']) == str(product_id) and s['status'] != PendingSaleStatus.FAILED
        )

    def _rebuild(self, product_id):
        """Recomputes one product's view: server snapshot minus unconfirmed sales."""
        key = str(product_id)
        snapshot = self._snapshots.get(key)
        index = next((i for i, p in enumerate(self.products) if str(p.get('id')) == key), None)
        if snapshot is None:
            if index is not None:
                del self.products[index]
            return
        view = dict(snapshot)
        view['stockCount'] = max(0, snapshot.get('stockCount', 0) - self._unconfirmed(product_id))
        if index is None:
            self.products.append(view)
        else:
            self.products[index] = view

    def _load(self, products):
        self._snapshots = {str(p.get('id')): dict(p) for p in products}
        self.products = []
        for p in products:
            self._rebuild(p.get('id'))

    def _sync_view(self, product):
        """Takes the server's snapshot, then re-applies sales it has not seen yet."""
        self._snapshots[str(product.get('id'))] = dict(product)
        self._rebuild(product.get('id'))

    async def refresh(self):
        """Loads products and stats, falling back to the local cache when offline."""
        try:
            products = await self.client.list_products()
            stats = await self.client.get_dashboard()
        except TransientStoreError:
            cached = self.storage.get_cached_data()
            if cached is None:
                raise
            logger.info("Serving cached dashboard data")
            self._load(cached.get('products') or [])
            self.stats = cached.get('stats')
            self.is_cached = True
            self.cached_at = cached.get('lastUpdated')
        else:
            self.storage.cache_dashboard_data(products, stats)
            self._load(products)
            self.stats = stats
            self.is_cached = False
            self.cached_at = None
        return {
            'products': self.products,
            'stats': self.stats,
            'isCached': self.is_cached,
            'cachedAt': self.cached_at,
            'pendingCount': self.pending_count,
        }

    def enqueue(self, product_id, sale_price, product_name=None):
        p = self._find(product_id)
        if product_name is None and p is not None:
            product_name = p.get('name')
        sale_id = self.storage.save_pending_sale(product_id, product_name, sale_price)
        self._rebuild(product_id)
        logger.info(f"Queued sale {sale_id} for product {product_id}")
        return sale_id

    async def submit_sale(self, product_id, sale_price):
        """Sells through the API, or queues the sale when the API is unreachable."""
        try:
            product = await self.client.sell_product(product_id, sale_price)
        except TransientStoreError as e:
            sale_id = self.enqueue(product_id, sale_price)
            return {'status': 'queued', 'pendingId': sale_id, 'message': e.message}
        except ShoetrackError as e:
            return {'status': 'failed', 'error': e, 'message': e.message}
        self._sync_view(product)
        return {'status': 'synced', 'product': product}

    def _fail(self, sale, err, attempts):
        self.storage.update_sale(sale['id'], status=PendingSaleStatus.FAILED, attempts=attempts, lastError=err.message)
        key = str(sale['productId'])
        # The server's answer is newer than the snapshot.
        if isinstance(err, OutOfStockError) and key in self._snapshots:
            self._snapshots[key].update(stockCount=0, isSold=True)
        elif isinstance(err, NotFoundError):
            self._snapshots.pop(key, None)
        self._rebuild(sale['productId'])
        logger.warning(f"Pending sale {sale['id']} failed: {err.message}")

    async def drain(self):
        """Replays pending sales in order. Returns a report, or None if a drain is already running."""
        if self._drain_lock.locked():
            return None
        async with self._drain_lock:
            report = {'synced': 0, 'retrying': 0, 'failed': 0}
            for sale in self.storage.get_pending_sales():
                if sale['status'] != PendingSaleStatus.PENDING:
                    continue
                self.storage.update_sale(sale['id'], status=PendingSaleStatus.SYNCING)
                attempts = sale.get('attempts', 0) + 1
                try:
                    product = await self.client.sell_product(sale['productId'], sale['salePrice'])
                except TransientStoreError as e:
                    if attempts >= self.max_attempts:
                        self._fail(sale, e, attempts)
                        report['failed'] += 1
                    else:
                        self.storage.update_sale(sale['id'], status=PendingSaleStatus.PENDING, attempts=attempts, lastError=e.message)
                        report['retrying'] += 1
                    # Still offline: leave the rest for the next drain.
                    break
                except ShoetrackError as e:
                    self._fail(sale, e, attempts)
                    report['failed'] += 1
                    continue
                self.storage.remove_pending_sale(sale['id'])
                self._sync_view(product)
                report['synced'] += 1
            if any(report.values()):
                logger.info(f"Drain finished: {report}")
            return report

    def retry_failed(self):
        count = 0
        touched = set()
        for sale in self.storage.get_pending_sales():
            if sale['status'] == PendingSaleStatus.FAILED:
                self.storage.update_sale(sale['id'], status=PendingSaleStatus.PENDING, attempts=0, lastError=None)
                touched.add(sale['productId'])
                count += 1
        for product_id in touched:
            self._rebuild(product_id)
        return count
