from flask import Blueprint

product_bp = Blueprint('product', __name__, url_prefix='/api')

from . import apis
