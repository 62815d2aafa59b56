from datetime import datetime
from sqlalchemy import event
from ..extensions import db
from ..utils import iso

class Sale(db.Model):
    """One unit sold. Append-only: rows are never updated after insert."""
    __tablename__ = 'sales'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False, index=True)
    product_name = db.Column(db.String(255))

    sale_price = db.Column(db.Float, nullable=False)
    cost_price = db.Column(db.Float, nullable=False)   # Product.price at the moment of sale
    profit = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    sale_date = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)
    timestamp = db.Column(db.BigInteger, nullable=False)

    product = db.relationship('Product', back_populates='sales')

    def to_dict(self):
        return {
            'id': self.id,
            'productId': self.product_id,
            'productName': self.product_name,
            'salePrice': self.sale_price,
            'costPrice': self.cost_price,
            'profit': self.profit,
            'quantity': self.quantity,
            'saleDate': iso(self.sale_date),
            'timestamp': self.timestamp,
        }

@event.listens_for(Sale, 'before_update')
def _reject_sale_update(mapper, connection, target):
    raise ValueError(f'Sale {target.id} is immutable')
