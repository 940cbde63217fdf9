"""
Student Performance Tracker
Application factory wiring configuration and the database
"""

from flask import Flask
from config import Config
from database import db, init_db

def create_app(config_object=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_object)
    
    # Initialize extensions with app
    db.init_app(app)
    
    # Initialize database
    init_db(app)
    
    return app

def create_manager(config_object=Config):
    """Build an app and return a StudentManager bound to its store"""
    from services.student_store import StudentStore
    from services.student_manager import StudentManager
    
    app = create_app(config_object)
    return StudentManager(StudentStore(app))
