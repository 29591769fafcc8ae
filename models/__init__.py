"""
Persistence package: SQLAlchemy models plus the process-wide DBStorage.

The engine is picked from APP_ENV when this package is first imported, so set
APP_ENV (and DATABASE_URL outside dev/test) before importing anything here.
"""
from models.db_storage import DBStorage

storage = DBStorage()
storage.reload()
