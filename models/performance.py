"""
Performance value object: marks by subject with derived total, percentage and grade
"""

from services.analytics_service import AnalyticsService

class Performance:
    """Derived fields are recomputed on every change to the marks"""
    
    def __init__(self, marks=None):
        self._marks = {}
        self.total = 0.0
        self.percentage = 0.0
        self.grade = AnalyticsService.grade(0.0)
        if marks:
            self._marks.update((subject, float(score)) for subject, score in marks.items())
            self._recalculate()
    
    @classmethod
    def from_marks(cls, marks):
        """Build from a complete subject -> score mapping"""
        return cls(marks)
    
    def put_mark(self, subject, score):
        """Add or replace one subject score and recompute"""
        self._marks[subject] = float(score)
        self._recalculate()
    
    @property
    def marks(self):
        return dict(self._marks)
    
    def _recalculate(self):
        self.total = float(sum(self._marks.values()))
        self.percentage = AnalyticsService.percentage(self._marks)
        self.grade = AnalyticsService.grade(self.percentage)
    
    def to_dict(self):
        return {
            'marks': self.marks,
            'total': self.total,
            'percentage': self.percentage,
            'grade': self.grade
        }
    
    def __eq__(self, other):
        if not isinstance(other, Performance):
            return NotImplemented
        return self.to_dict() == other.to_dict()
    
    def __str__(self):
        return (f'Performance{{Total={self.total:.2f}, Percentage={self.percentage:.2f}, '
                f'Grade={self.grade}, Marks={self._marks}}}')
