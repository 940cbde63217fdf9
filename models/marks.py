"""
Marks model for the Student Performance Tracker
"""

from database import db

class Mark(db.Model):
    """Score of one student in one subject"""
    __tablename__ = 'marks'
    
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subjects.id', ondelete='CASCADE'), nullable=False)
    score = db.Column(db.Float, nullable=False)
    
    # One mark per student and subject; a second write replaces the score
    __table_args__ = (db.UniqueConstraint('student_id', 'subject_id', name='unique_student_subject_mark'),)
    
    def to_dict(self):
        """Convert mark to dictionary"""
        return {
            'id': self.id,
            'student_id': self.student_id,
            'subject_id': self.subject_id,
            'subject_name': self.subject.name if self.subject else None,
            'score': self.score
        }
    
    def __repr__(self):
        subject_name = self.subject.name if self.subject else "Unknown"
        return f'<Mark student={self.student_id} - {subject_name}: {self.score}>'
