"""
Configuration settings for the Student Performance Tracker
"""

import os

class Config:
    """Base configuration class"""
    
    # Database settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///students.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    
    # Application settings
    PASS_THRESHOLD = 50.0  # Minimum percentage counted as a pass
    ATTENDANCE_THRESHOLD = 75  # Minimum attendance percentage
    DEFAULT_TOP_COUNT = 5

class TestingConfig(Config):
    """Configuration used by the test suite"""
    
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
