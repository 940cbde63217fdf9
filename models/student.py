"""
Student model for the Student Performance Tracker
"""

from database import db
from models.records import StudentRecord

class Student(db.Model):
    """Student model, the aggregation root for marks and attendance"""
    __tablename__ = 'students'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    course = db.Column(db.String(100), nullable=False)
    roll = db.Column(db.String(20), unique=True, nullable=False, index=True)
    
    # Relationships
    marks = db.relationship('Mark', backref='student', lazy='select',
                            cascade='all, delete')
    attendance = db.relationship('Attendance', backref='student', uselist=False,
                                 cascade='all, delete')
    
    def apply_changes(self, name=None, age=None, course=None, roll=None):
        """Apply a partial update; None leaves a field unchanged"""
        if name is not None:
            self.name = name
        if age is not None:
            self.age = age
        if course is not None:
            self.course = course
        if roll is not None:
            self.roll = roll
    
    def to_record(self):
        """Detach the row into a plain StudentRecord"""
        return StudentRecord(
            id=self.id,
            name=self.name,
            age=self.age,
            course=self.course,
            roll=self.roll
        )
    
    def to_dict(self):
        """Convert student to dictionary"""
        return self.to_record().to_dict()
    
    def __repr__(self):
        return f'<Student {self.roll}: {self.name}>'
