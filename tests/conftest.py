import pytest
from shoetrack import create_app
from shoetrack.extensions import db
from shoetrack.modules.product.services import create_product

ACCESS_PASSWORD = 'open-sesame'

class BaseTestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    ACCESS_PASSWORD = ACCESS_PASSWORD
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SHOE_CODE_PREFIX = None
    CACHE_TYPE = 'SimpleCache'
    CELERY_BROKER_URL = 'memory://'
    CELERY_RESULT_BACKEND = 'cache+memory://'
    CELERY_TASK_ALWAYS_EAGER = True


@pytest.fixture
def app(tmp_path):
    config = type('TestConfig', (BaseTestConfig,), {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'shoetrack.db'}",
    })
    app = create_app(config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    res = client.post('/api/auth/login', json={'password': ACCESS_PASSWORD})
    assert res.status_code == 200
    return client


@pytest.fixture
def make_product(app):
    def _make(**overrides):
        data = {
            'name': 'Air Runner',
            'price': 40,
            'sellingPrice': 80,
            'stockCount': 2,
            'imageFile': 'air-runner.jpg',
        }
        data.update(overrides)
        ok, product = create_product(data)
        assert ok, product.message
        return product
    return _make
