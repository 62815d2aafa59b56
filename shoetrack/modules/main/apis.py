from flask import jsonify
from flask_login import login_required
from shoetrack.modules.main import main_bp
from shoetrack.modules.main.services import get_dashboard_stats

@main_bp.route('/dashboard', methods=['GET'])
@login_required
def api_dashboard():
    return jsonify(get_dashboard_stats())
