from ..extensions import db
from .product import Product
from .sales import Sale
