from flask import request, jsonify
from flask_login import login_required
from shoetrack.modules.product import product_bp
from shoetrack.modules.product.services import get_product, list_products, create_product, delete_product
from shoetrack.modules.product.bundle_services import expand_bundle
from shoetrack.modules.main.errors import error_response, json_body

@product_bp.route('/products', methods=['GET'])
@login_required
def api_list_products():
    products = list_products(request.args.to_dict())
    return jsonify([p.to_dict() for p in products])

@product_bp.route('/products', methods=['POST'])
@login_required
def api_create_product():
    ok, data = json_body()
    if not ok: return error_response(data)
    ok, res = create_product(data)
    if ok: return jsonify(res.to_dict()), 201
    return error_response(res)

@product_bp.route('/products/<int:product_id>', methods=['GET'])
@login_required
def api_get_product(product_id):
    ok, res = get_product(product_id)
    if ok: return jsonify(res.to_dict())
    return error_response(res)

@product_bp.route('/products/<int:product_id>', methods=['DELETE'])
@login_required
def api_delete_product(product_id):
    ok, res = delete_product(product_id)
    if ok: return jsonify({'status': 'success', 'success': True, 'message': 'Product deleted'})
    return error_response(res)

@product_bp.route('/products/bulk', methods=['POST'])
@login_required
def api_create_bundle():
    ok, data = json_body()
    if not ok: return error_response(data)
    ok, res = expand_bundle(data)
    if ok:
        return jsonify({
            'status': 'success', 'success': True,
            'message': f"Created {res['count']} products successfully",
            **res
        }), 201
    return error_response(res)
