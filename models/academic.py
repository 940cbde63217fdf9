"""
Subject model for the Student Performance Tracker
"""

from database import db

class Subject(db.Model):
    """Shared subject dictionary, created lazily the first time a mark names it"""
    __tablename__ = 'subjects'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    
    marks = db.relationship('Mark', backref='subject', lazy='select',
                            cascade='all, delete')
    
    __table_args__ = (db.UniqueConstraint('name', name='unique_subject_name'),)
    
    def to_dict(self):
        """Convert subject to dictionary"""
        return {
            'id': self.id,
            'name': self.name
        }
    
    def __repr__(self):
        return f'<Subject {self.name}>'
