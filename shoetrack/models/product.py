from datetime import datetime
from ..extensions import db
from ..constants import GenderCategory, AgeGroup, Condition
from ..utils import iso
from sqlalchemy import Index, CheckConstraint

class Product(db.Model):
    __tablename__ = 'products'
    __table_args__ = (
        Index('ix_product_bundle', 'bundle_id'),
        Index('ix_product_category', 'gender_category', 'age_group'),
        CheckConstraint('stock_count >= 0', name='ck_product_stock_non_negative'),
        CheckConstraint('stock_count <= original_stock', name='ck_product_stock_within_original'),
    )
    id = db.Column(db.Integer, primary_key=True)
    shoe_code = db.Column(db.String(100), unique=True, nullable=True, index=True)
    bundle_id = db.Column(db.String(36), nullable=True)

    base_name = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, default='')
    color = db.Column(db.String(50), nullable=True)
    size = db.Column(db.String(20), nullable=True)
    sizes = db.Column(db.JSON, default=list)

    gender_category = db.Column(db.String(20), nullable=False, default=GenderCategory.DEFAULT)
    age_group = db.Column(db.String(20), nullable=False, default=AgeGroup.DEFAULT)
    condition = db.Column(db.String(20), nullable=False, default=Condition.DEFAULT)
    location = db.Column(db.String(255), default='')
    notes = db.Column(db.Text, default='')
    image_file = db.Column(db.String(500), default='')

    price = db.Column(db.Float, nullable=False)             # cost
    selling_price = db.Column(db.Float, nullable=False)
    expected_profit = db.Column(db.Float, nullable=False)   # fixed at creation

    stock_count = db.Column(db.Integer, nullable=False)
    original_stock = db.Column(db.Integer, nullable=False)
    is_sold = db.Column(db.Boolean, nullable=False, default=False)
    total_sales = db.Column(db.Integer, nullable=False, default=0)
    actual_profit = db.Column(db.Float, nullable=False, default=0)
    last_sale_date = db.Column(db.DateTime, nullable=True)
    last_sale_price = db.Column(db.Float, nullable=False, default=0)

    date_added = db.Column(db.DateTime, nullable=False, default=datetime.now)
    date_sold = db.Column(db.DateTime, nullable=True)

    sales = db.relationship('Sale', back_populates='product', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'shoeCode': self.shoe_code,
            'bundleId': self.bundle_id,
            'baseName': self.base_name,
            'name': self.name,
            'description': self.description,
            'color': self.color,
            'size': self.size,
            'sizes': list(self.sizes or []),
            'genderCategory': self.gender_category,
            'ageGroup': self.age_group,
            'condition': self.condition,
            'location': self.location,
            'notes': self.notes,
            'imageFile': self.image_file,
            'price': self.price,
            'sellingPrice': self.selling_price,
            'expectedProfit': self.expected_profit,
            'stockCount': self.stock_count,
            'originalStock': self.original_stock,
            'isSold': self.is_sold,
            'totalSales': self.total_sales,
            'actualProfit': self.actual_profit,
            'lastSaleDate': iso(self.last_sale_date),
            'lastSalePrice': self.last_sale_price,
            'dateAdded': iso(self.date_added),
            'dateSold': iso(self.date_sold),
        }
