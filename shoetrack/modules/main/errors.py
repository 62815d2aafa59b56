from flask import jsonify, request
from . import main_bp
from shoetrack.models import db
from shoetrack.errors import ValidationError
from shoetrack.utils import require_object

def error_response(err):
    return jsonify(err.to_dict()), err.status_code

def json_body():
    """Returns (True, dict) for the request body, or (False, error) when it isn't a JSON object."""
    try:
        return True, require_object(request.get_json(silent=True))
    except ValidationError as e:
        return False, e

@main_bp.app_errorhandler(404)
def not_found(e):
    return jsonify({'status': 'error', 'code': 'not_found', 'message': getattr(e, 'description', 'Not Found')}), 404

@main_bp.app_errorhandler(405)
def method_not_allowed(e):
    return jsonify({'status': 'error', 'code': 'method_not_allowed', 'message': getattr(e, 'description', 'Method Not Allowed')}), 405

@main_bp.app_errorhandler(500)
def internal_error(e):
    db.session.rollback()
    return jsonify({'status': 'error', 'code': 'internal_error', 'message': 'Internal server error'}), 500
