"""
Database configuration and initialization for the Student Performance Tracker
"""

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import sqlite3

# Initialize SQLAlchemy instance
db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

class DatabaseError(Exception):
    """Base exception for database operations"""
    pass

class ConstraintViolation(DatabaseError):
    """A write broke a uniqueness or foreign-key rule"""
    pass

class StorageUnavailable(DatabaseError):
    """The underlying store could not be reached or initialized"""
    pass

class NotFound(LookupError):
    """The targeted student does not exist"""
    pass

class InvalidInput(ValueError):
    """A malformed primitive value reached the manager"""
    pass

def translate_db_error(error):
    """Map a SQLAlchemy exception onto the application error hierarchy"""
    if isinstance(error, IntegrityError):
        return ConstraintViolation(f"Constraint violation: {error.orig}")
    return StorageUnavailable(f"Database operation failed: {error}")

def init_db(app):
    """Create any missing tables; safe to call on every startup"""
    with app.app_context():
        # Import all models to ensure they are registered
        from models import Student, Subject, Mark, Attendance
        
        try:
            db.create_all()
        except SQLAlchemyError as e:
            app.logger.error("Database initialization failed: %s", e)
            raise StorageUnavailable(f"Database initialization failed: {e}") from e
        
        app.logger.info("Database initialized at %s", app.config['SQLALCHEMY_DATABASE_URI'])

def reset_database(app):
    """Reset database - WARNING: This will delete all data"""
    with app.app_context():
        from models import Student, Subject, Mark, Attendance
        
        db.drop_all()
        db.create_all()
        app.logger.warning("Database reset completed")
