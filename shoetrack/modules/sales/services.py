import math
from flask import current_app
from sqlalchemy import and_, case, func, update
from shoetrack.models import db, Product, Sale
from shoetrack.errors import NotFoundError, OutOfStockError
from shoetrack.services.db import fail, invalidate_dashboard
from shoetrack.utils import parse_id, parse_positive_number, now, now_ms

def record_sale(product_id, sale_price):
    """Sells one unit. Returns (True, product) or (False, error).

    The decrement is a single UPDATE guarded by ``stock_count > 0``; whatever
    the caller read earlier, a sale that finds no stock left touches nothing.
    """
    try:
        pid = parse_id(product_id)
        price = parse_positive_number(sale_price, 'Valid sale price is required', 'salePrice')

        product = db.session.get(Product, pid)
        if not product:
            raise NotFoundError('Product not found', 'productId')
        if product.stock_count <= 0:
            raise OutOfStockError('Product is out of stock', 'productId')

        sold_at = now()
        result = db.session.execute(
            update(Product)
            .where(Product.id == pid, Product.stock_count > 0)
            .values(
                stock_count=Product.stock_count - 1,
                total_sales=Product.total_sales + 1,
                actual_profit=Product.actual_profit + (price - Product.price),
                last_sale_date=sold_at,
                last_sale_price=price,
                # SET sees pre-update values: stock 1 here means this sale empties it.
                is_sold=case((Product.stock_count == 1, True), else_=Product.is_sold),
                date_sold=case(
                    (and_(Product.stock_count == 1, Product.date_sold.is_(None)), sold_at),
                    else_=Product.date_sold,
                ),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise OutOfStockError('Product is out of stock', 'productId')

        db.session.refresh(product)

        sale = Sale(
            product_id=product.id,
            product_name=product.name,
            sale_price=price,
            cost_price=product.price,
            profit=price - product.price,
            quantity=1,
            sale_date=sold_at,
            timestamp=now_ms(),
        )
        db.session.add(sale)
        db.session.commit()
        invalidate_dashboard()

        current_app.logger.info(f"Sale recorded: product {product.id} at {price} (stock left {product.stock_count})")
        return True, product
    except Exception as e:
        return False, fail(e, 'record sale')

def list_sales(product_id=None):
    query = Sale.query
    if product_id is not None:
        query = query.filter(Sale.product_id == product_id)
    return query.order_by(Sale.sale_date.desc(), Sale.id.desc()).all()

def reconcile_sales_ledger():
    """Audits every product's counters against its Sale rows.

    Returns (True, {'checked': n, 'mismatches': [...]}) or (False, error).
    """
    try:
        totals = {
            pid: (cnt, float(profit or 0))
            for pid, cnt, profit in db.session.query(
                Sale.product_id, func.count(Sale.id), func.sum(Sale.profit)
            ).group_by(Sale.product_id).all()
        }

        mismatches = []
        products = Product.query.order_by(Product.id).all()
        for p in products:
            sale_count, sale_profit = totals.get(p.id, (0, 0.0))
            issues = []
            if p.total_sales != sale_count:
                issues.append(f'totalSales {p.total_sales} != {sale_count} sale records')
            if not math.isclose(p.actual_profit or 0, sale_profit, abs_tol=0.005):
                issues.append(f'actualProfit {p.actual_profit} != {sale_profit} from sale records')
            if not 0 <= p.stock_count <= p.original_stock:
                issues.append(f'stockCount {p.stock_count} outside 0..{p.original_stock}')
            elif p.original_stock - p.stock_count != sale_count:
                issues.append(f'{p.original_stock - p.stock_count} units gone but {sale_count} sale records')
            if issues:
                current_app.logger.warning(f"Ledger mismatch on product {p.id}: {'; '.join(issues)}")
                mismatches.append({'productId': p.id, 'name': p.name, 'issues': issues})

        return True, {'checked': len(products), 'mismatches': mismatches}
    except Exception as e:
        return False, fail(e, 'reconcile sales ledger')
