from flask import current_app
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

OPERATOR_ID = 'operator'

class Operator(UserMixin):
    """The single shop identity behind the shared password."""
    id = OPERATOR_ID

def load_operator(user_id):
    return Operator() if user_id == OPERATOR_ID else None

def _password_hash():
    pw_hash = current_app.config.get('ACCESS_PASSWORD_HASH')
    if not pw_hash:
        pw_hash = generate_password_hash(current_app.config['ACCESS_PASSWORD'])
        current_app.config['ACCESS_PASSWORD_HASH'] = pw_hash
    return pw_hash

def authenticate(password):
    if not password or not isinstance(password, str):
        return None
    if check_password_hash(_password_hash(), password):
        return Operator()
    current_app.logger.warning("Rejected login attempt with a wrong access password")
    return None
