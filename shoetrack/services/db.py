from datetime import date
from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from shoetrack.extensions import db, cache
from shoetrack.constants import DASHBOARD_CACHE_KEY
from shoetrack.errors import ShoetrackError, ConflictError, TransientStoreError

def fail(e, action):
    """Rolls back the session and turns any exception caught at a service boundary into a typed error."""
    db.session.rollback()
    if isinstance(e, ShoetrackError):
        return e
    if isinstance(e, IntegrityError):
        current_app.logger.warning(f"{action} rejected by the store: {e.orig}")
        return ConflictError('A product with this shoe code already exists', 'shoeCode')
    if isinstance(e, SQLAlchemyError):
        current_app.logger.error(f"{action} failed: {e}")
        return TransientStoreError(f'Failed to {action}', 'Check DATABASE_URL and that the database is reachable')
    raise e

def dashboard_cache_key(day=None):
    # One entry per calendar day.
    day = day or date.today()
    return f"{DASHBOARD_CACHE_KEY}:{day.isoformat()}"

def invalidate_dashboard():
    cache.delete(dashboard_cache_key())
