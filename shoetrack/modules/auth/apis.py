from flask import jsonify
from flask_login import login_user, logout_user, login_required, current_user
from shoetrack.modules.auth import auth_bp
from shoetrack.modules.auth.services import authenticate
from shoetrack.modules.main.errors import error_response, json_body

@auth_bp.route('/login', methods=['POST'])
def login_api():
    ok, data = json_body()
    if not ok: return error_response(data)
    operator = authenticate(data.get('password'))
    if not operator:
        return jsonify({'status': 'error', 'code': 'unauthorized', 'message': 'Incorrect password'}), 401

    login_user(operator, remember=bool(data.get('remember')))
    return jsonify({'status': 'success', 'message': 'Logged in'})

@auth_bp.route('/logout', methods=['POST'])
def logout_api():
    logout_user()
    return jsonify({'status': 'success', 'message': 'Logged out'})

@auth_bp.route('/session', methods=['GET'])
@login_required
def session_api():
    return jsonify({'status': 'success', 'authenticated': True, 'user': current_user.get_id()})
