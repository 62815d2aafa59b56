from flask import current_app
from sqlalchemy import or_
from shoetrack.models import db, Product, Sale
from shoetrack.constants import GenderCategory, AgeGroup, Condition, StockFilter
from shoetrack.errors import ValidationError, NotFoundError, ConflictError
from shoetrack.services.db import fail, invalidate_dashboard
from shoetrack.utils import clean_string, parse_positive_number, parse_positive_int, normalize_choice, now, require_object

def get_product(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        return False, NotFoundError('Product not found', 'productId')
    return True, product

def list_products(params=None):
    params = params or {}
    query = Product.query

    if params.get('bundleId'):
        query = query.filter(Product.bundle_id == params['bundleId'])
    if params.get('genderCategory') and params['genderCategory'] != 'all':
        query = query.filter(Product.gender_category == clean_string(params['genderCategory']).lower())
    if params.get('ageGroup') and params['ageGroup'] != 'all':
        try:
            age = normalize_choice(params['ageGroup'], AgeGroup, 'ageGroup')
        except ValidationError:
            age = clean_string(params['ageGroup']).lower()
        query = query.filter(Product.age_group == age)
    if params.get('stock') == StockFilter.IN_STOCK:
        query = query.filter(Product.stock_count > 0)
    elif params.get('stock') == StockFilter.OUT_OF_STOCK:
        query = query.filter(Product.stock_count == 0)
    if params.get('q'):
        like = f"%{clean_string(params['q'])}%"
        query = query.filter(or_(Product.name.ilike(like), Product.shoe_code.ilike(like), Product.description.ilike(like)))

    return query.order_by(Product.id).all()

def shoe_codes_in_use(codes):
    codes = [c for c in codes if c]
    if not codes: return set()
    return {r[0] for r in db.session.query(Product.shoe_code).filter(Product.shoe_code.in_(codes)).all()}

def create_product(data):
    """Single-item add. Returns (True, product) or (False, error)."""
    try:
        data = require_object(data)
        name = clean_string(data.get('name'))
        if not name:
            raise ValidationError('Product name is required', 'name')
        price = parse_positive_number(data.get('price'), 'Valid purchase price is required', 'price')
        selling_price = parse_positive_number(data.get('sellingPrice'), 'Valid selling price is required', 'sellingPrice')
        stock = parse_positive_int(data.get('stockCount'), 'Valid stock count is required (minimum 1)', 'stockCount')

        sizes = data.get('sizes') or []
        if not isinstance(sizes, list):
            raise ValidationError('Sizes must be a list', 'sizes')
        sizes = [clean_string(s) for s in sizes if clean_string(s)]

        shoe_code = clean_string(data.get('shoeCode')) or None
        if shoe_code and shoe_codes_in_use([shoe_code]):
            raise ConflictError(f'Shoe code {shoe_code} is already in use', 'shoeCode')

        product = Product(
            shoe_code=shoe_code,
            bundle_id=None,
            base_name=name,
            name=name,
            description=clean_string(data.get('description')),
            color=clean_string(data.get('color')) or None,
            size=sizes[0] if len(sizes) == 1 else None,
            sizes=sizes,
            gender_category=normalize_choice(data.get('genderCategory'), GenderCategory, 'genderCategory'),
            age_group=normalize_choice(data.get('ageGroup'), AgeGroup, 'ageGroup'),
            condition=normalize_choice(data.get('condition'), Condition, 'condition'),
            location=clean_string(data.get('location')),
            notes=clean_string(data.get('notes')),
            image_file=clean_string(data.get('imageFile')),
            price=price,
            selling_price=selling_price,
            expected_profit=selling_price - price,
            stock_count=stock,
            original_stock=stock,
            is_sold=False,
            total_sales=0,
            actual_profit=0,
            last_sale_price=0,
            date_added=now(),
        )
        db.session.add(product)
        db.session.commit()
        invalidate_dashboard()
        current_app.logger.info(f"Product {product.id} added ({product.name}, stock {stock})")
        return True, product
    except Exception as e:
        return False, fail(e, 'add product to database')

def delete_product(product_id):
    """Deletes a product that has never been sold."""
    try:
        product = db.session.get(Product, product_id)
        if not product:
            raise NotFoundError('Product not found', 'productId')

        has_history = product.total_sales > 0 or db.session.query(Sale.id).filter(Sale.product_id == product.id).first() is not None
        if has_history:
            raise ConflictError('Cannot delete a product with sales history', 'productId')

        db.session.delete(product)
        db.session.commit()
        invalidate_dashboard()
        current_app.logger.info(f"Product {product_id} deleted")
        return True, None
    except Exception as e:
        return False, fail(e, 'delete product')
