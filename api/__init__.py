import logging

from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Book Catalog API",
        "version": "1.0.0",
        "description": "REST API for managing books, book details and publishers.",
    },
    "basePath": "/",  # Blueprints are mounted under /api/v1
    "schemes": ["http"],
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Tests build an isolated app per session with config_name="testing".
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))

    logging.basicConfig(level=app.config["LOG_LEVEL"], format=LOG_FORMAT)
    logging.getLogger().setLevel(app.config["LOG_LEVEL"])

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    from .health import bp as health_bp
    from .books import bp as books_bp
    from .book_details import bp as book_details_bp
    from .publishers import bp as publishers_bp
    from .seed import register_commands

    app.register_blueprint(health_bp, url_prefix="/api/v1")
    app.register_blueprint(books_bp, url_prefix="/api/v1")
    app.register_blueprint(book_details_bp, url_prefix="/api/v1")
    app.register_blueprint(publishers_bp, url_prefix="/api/v1")
    register_commands(app)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Book Catalog API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    logging.getLogger(__name__).info("Book Catalog API created (env=%s)", app.config["APP_ENV"])
    return app
