import json
import logging
import os
import uuid
from shoetrack.constants import PendingSaleStatus
from shoetrack.utils import now_ms

logger = logging.getLogger(__name__)

class LocalStorage:
    """String key/value store, one file per key, written atomically."""

    def __init__(self, directory):
        self.directory = os.path.expanduser(directory)
        os.makedirs(self.directory, exist_ok=True)

    def _path(self, key):
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key):
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set_item(self, key, value):
        path = self._path(key)
        tmp = f"{path}.tmp"
        with open(tmp, 'w', encoding='utf-8') as f:
            f.write(value)
        os.replace(tmp, path)

    def remove_item(self, key):
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


class OfflineStorage:
    PENDING_SALES_KEY = 'pending_sales'
    CACHE_KEY = 'dashboard_cache'

    def __init__(self, storage):
        self.storage = storage

    def _read(self, key, default):
        raw = self.storage.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable offline data under '{key}'")
            return default

    def _write_sales(self, sales):
        self.storage.set_item(self.PENDING_SALES_KEY, json.dumps(sales))

    def save_pending_sale(self, product_id, product_name, sale_price):
        sales = self.get_pending_sales()
        sale = {
            'id': uuid.uuid4().hex,
            'productId': product_id,
            'productName': product_name,
            'salePrice': sale_price,
            'timestamp': now_ms(),
            'status': PendingSaleStatus.PENDING,
            'attempts': 0,
            'lastError': None,
        }
        sales.append(sale)
        self._write_sales(sales)
        return sale['id']

    def get_pending_sales(self):
        sales = self._read(self.PENDING_SALES_KEY, [])
        return sales if isinstance(sales, list) else []

    def remove_pending_sale(self, sale_id):
        self._write_sales([s for s in self.get_pending_sales() if s['id'] != sale_id])

    def update_sale(self, sale_id, **fields):
        sales = self.get_pending_sales()
        for s in sales:
            if s['id'] == sale_id:
                s.update(fields)
        self._write_sales(sales)

    def cache_dashboard_data(self, products, stats):
        cache = {'products': products, 'stats': stats, 'lastUpdated': now_ms()}
        self.storage.set_item(self.CACHE_KEY, json.dumps(cache))

    def get_cached_data(self):
        data = self._read(self.CACHE_KEY, None)
        return data if isinstance(data, dict) else None

    def clear_all(self):
        self.storage.remove_item(self.PENDING_SALES_KEY)
        self.storage.remove_item(self.CACHE_KEY)

    def has_pending_sales(self):
        return len(self.get_pending_sales()) > 0
