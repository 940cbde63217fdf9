"""
Attendance model for the Student Performance Tracker
"""

from database import db

class Attendance(db.Model):
    """Cumulative attendance counters, exactly one row per student"""
    __tablename__ = 'attendance'
    
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id', ondelete='CASCADE'),
                           unique=True, nullable=False)
    present = db.Column(db.Integer, nullable=False, default=0)
    total = db.Column(db.Integer, nullable=False, default=0)
    
    def as_pair(self):
        """Return (present, total)"""
        return (self.present or 0, self.total or 0)
    
    def to_dict(self):
        """Convert attendance to dictionary"""
        return {
            'student_id': self.student_id,
            'present': self.present,
            'total': self.total
        }
    
    def __repr__(self):
        return f'<Attendance student={self.student_id}: {self.present}/{self.total}>'
