from .storage import LocalStorage, OfflineStorage
from .client import ShoetrackClient
from .queue import OfflineSaleQueue
