from flask import request, jsonify
from flask_login import login_required
from shoetrack.modules.sales import sales_bp
from shoetrack.modules.sales.services import record_sale, list_sales
from shoetrack.modules.sales.tasks import task_reconcile_ledger
from shoetrack.modules.main.errors import error_response, json_body

@sales_bp.route('/products/sell', methods=['POST'])
@login_required
def api_sell_product():
    ok, d = json_body()
    if not ok: return error_response(d)
    ok, res = record_sale(d.get('productId'), d.get('salePrice'))
    if ok:
        return jsonify({
            'status': 'success', 'success': True,
            'message': 'Sale recorded successfully',
            'product': res.to_dict()
        })
    return error_response(res)

@sales_bp.route('/sales', methods=['GET'])
@login_required
def api_list_sales():
    pid = request.args.get('productId', type=int)
    return jsonify([s.to_dict() for s in list_sales(pid)])

@sales_bp.route('/sales/reconcile', methods=['POST'])
@login_required
def api_reconcile_sales():
    task = task_reconcile_ledger.delay()
    return jsonify({'status': 'success', 'task_id': task.id}), 202
