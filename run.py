from shoetrack import create_app
from shoetrack.extensions import celery  # noqa: F401  (celery -A run.celery worker)
from config import Config

app = create_app(Config)

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
