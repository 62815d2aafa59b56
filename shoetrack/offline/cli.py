import asyncio
import logging
import click
from shoetrack.offline.storage import LocalStorage, OfflineStorage
from shoetrack.offline.client import ShoetrackClient
from shoetrack.offline.queue import OfflineSaleQueue
from shoetrack.errors import ShoetrackError

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

storage_option = click.option('--storage-dir', envvar='SHOETRACK_OFFLINE_DIR', default='~/.shoetrack', show_default=True, help='Where pending sales are kept.')

@click.group()
def cli():
    """Offline sales queue for the shoe tracker."""

@cli.command()
@storage_option
def status(storage_dir):
    """List sales waiting to reach the server."""
    store = OfflineStorage(LocalStorage(storage_dir))
    sales = store.get_pending_sales()
    if not sales:
        print("✅ No pending sales.")
        return
    for s in sales:
        err = f" ({s['lastError']})" if s.get('lastError') else ''
        print(f"{s['id']}  product {s['productId']}  {s['salePrice']}  {s['status']}{err}")
    print(f"{len(sales)} pending sale(s).")

@cli.command()
@click.option('--url', envvar='SHOETRACK_URL', required=True, help='Base URL of the shop server.')
@click.option('--password', envvar='SHOETRACK_PASSWORD', required=True, help='Shared shop password.')
@click.option('--timeout', default=10.0, show_default=True, help='Per-request timeout in seconds.')
@click.option('--max-attempts', default=3, show_default=True, help='Network attempts before a sale is marked failed.')
@click.option('--retry-failed', is_flag=True, help='Put failed sales back in the queue first.')
@storage_option
def sync(url, password, timeout, max_attempts, retry_failed, storage_dir):
    """Send pending sales to the server."""
    try:
        report, left = asyncio.run(_sync(url, password, timeout, max_attempts, retry_failed, storage_dir))
    except ShoetrackError as e:
        print(f"❌ Sync failed: {e.message}")
        raise SystemExit(1)
    print(f"Synced {report['synced']}, retrying {report['retrying']}, failed {report['failed']}. {left} still queued.")
    if report['failed']:
        raise SystemExit(1)

async def _sync(url, password, timeout, max_attempts, retry_failed, storage_dir):
    store = OfflineStorage(LocalStorage(storage_dir))
    async with ShoetrackClient(url, password, timeout) as client:
        queue = OfflineSaleQueue(store, client, max_attempts)
        if retry_failed:
            queue.retry_failed()
        await client.login()
        report = await queue.drain()
        return report, queue.pending_count
