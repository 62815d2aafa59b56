from datetime import datetime, time
from sqlalchemy import func
from shoetrack.extensions import cache
from shoetrack.models import db, Product, Sale
from shoetrack.services.db import dashboard_cache_key

def compute_dashboard_stats(today=None):
    today = today or datetime.now().date()
    start = datetime.combine(today, time.min)
    end = datetime.combine(today, time.max)

    total_products, total_stock, total_original, total_actual, total_sales = db.session.query(
        func.count(Product.id),
        func.coalesce(func.sum(Product.stock_count), 0),
        func.coalesce(func.sum(Product.original_stock), 0),
        func.coalesce(func.sum(Product.actual_profit), 0),
        func.coalesce(func.sum(Product.total_sales), 0),
    ).one()

    # Potential profit still sitting on the shelf.
    expected = db.session.query(
        func.coalesce(func.sum(Product.expected_profit * Product.stock_count), 0)
    ).filter(Product.is_sold == False).scalar()  # noqa: E712

    today_sales, today_profit = db.session.query(
        func.count(Sale.id), func.coalesce(func.sum(Sale.profit), 0)
    ).filter(Sale.sale_date >= start, Sale.sale_date <= end).one()

    return {
        'totalProducts': int(total_products),
        'totalStock': int(total_stock),
        'totalOriginalStock': int(total_original),
        'totalExpectedProfit': float(expected or 0),
        'totalActualProfit': float(total_actual),
        'totalSales': int(total_sales),
        'todaySales': int(today_sales),
        'todayProfit': float(today_profit),
    }

def get_dashboard_stats(today=None):
    today = today or datetime.now().date()
    key = dashboard_cache_key(today)
    stats = cache.get(key)
    if stats is None:
        stats = compute_dashboard_stats(today)
        cache.set(key, stats)
    return stats
