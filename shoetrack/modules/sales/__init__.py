from flask import Blueprint

sales_bp = Blueprint('sales', __name__, url_prefix='/api')

from . import apis
