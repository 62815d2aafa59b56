import os
from flask import Flask, jsonify, has_app_context
from .extensions import db, login_manager, cache, celery
from .commands import init_db_command, update_db_command, reset_products_command, verify_ledger_command

@login_manager.user_loader
def load_user(user_id):
    from .modules.auth.services import load_operator
    return load_operator(user_id)

@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'status': 'error', 'code': 'unauthorized', 'message': 'Login required'}), 401

def create_app(config_class):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    login_manager.init_app(app)
    cache.init_app(app)

    celery.conf.broker_url = app.config['CELERY_BROKER_URL']
    celery.conf.result_backend = app.config['CELERY_RESULT_BACKEND']
    celery.conf.update(
        accept_content=['json'], task_serializer='json', result_serializer='json',
        timezone=os.environ.get('TZ', 'Africa/Lagos'),
        task_always_eager=app.config.get('CELERY_TASK_ALWAYS_EAGER', False)
    )
    class ContextTask(celery.Task):
        def __call__(self, *args, **kwargs):
            if has_app_context(): return self.run(*args, **kwargs)
            with app.app_context(): return self.run(*args, **kwargs)
    celery.Task = ContextTask

    app.cli.add_command(init_db_command)
    app.cli.add_command(update_db_command)
    app.cli.add_command(reset_products_command)
    app.cli.add_command(verify_ledger_command)

    from .modules.main import main_bp
    from .modules.auth import auth_bp
    from .modules.product import product_bp
    from .modules.sales import sales_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(product_bp)
    app.register_blueprint(sales_bp)

    return app
