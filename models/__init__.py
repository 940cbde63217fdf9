"""
Database models package for the Student Performance Tracker
"""

from .records import StudentRecord
from .student import Student
from .academic import Subject
from .marks import Mark
from .attendance import Attendance

__all__ = [
    'StudentRecord', 'Student', 'Subject', 'Mark', 'Attendance'
]
