"""
Run the Book Catalog API on Flask's development server: ``python -m api``.

APP_ENV picks the configuration and the database (SQLite file by default).
Load sample books first with ``flask --app api seed-books``. Swagger UI is
served at /apidocs/.
"""
import logging
import os

from . import create_app

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.getenv("FLASK_RUN_PORT", "8000"))
    debug = os.getenv("FLASK_DEBUG", str(app.config["DEBUG"])).lower() in ("1", "true", "yes")
    logging.getLogger(__name__).info("Book Catalog API on http://%s:%d/apidocs/", host, port)
    app.run(host=host, port=port, debug=debug)
