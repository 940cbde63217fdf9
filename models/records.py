"""
Plain record carriers handed across the manager boundary
"""

class StudentRecord:
    """Detached snapshot of a student row"""
    
    __slots__ = ('id', 'name', 'age', 'course', 'roll')
    
    def __init__(self, id, name, age, course, roll):
        self.id = id
        self.name = name
        self.age = age
        self.course = course
        self.roll = roll
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'age': self.age,
            'course': self.course,
            'roll': self.roll
        }
    
    def __eq__(self, other):
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()
    
    def __hash__(self):
        return hash((self.id, self.roll))
    
    def __repr__(self):
        return (f'Student{{ID={self.id}, Name={self.name}, Age={self.age}, '
                f'Course={self.course}, Roll={self.roll}}}')
