#!/usr/bin/env python3
"""
Sample data generator for the Student Performance Tracker
Creates sample data for testing and demonstration
"""

from app import create_manager

STUDENTS = [
    {'name': 'Alice Johnson', 'age': 19, 'course': 'Computer Science', 'roll': 'CS001'},
    {'name': 'Bob Smith', 'age': 20, 'course': 'Computer Science', 'roll': 'CS002'},
    {'name': 'Carol Davis', 'age': 19, 'course': 'Information Technology', 'roll': 'IT001'},
    {'name': 'David Brown', 'age': 21, 'course': 'Electronics', 'roll': 'EC001'},
]

MARKS = {
    'CS001': {'Mathematics': 92, 'Physics': 88, 'Programming': 95},
    'CS002': {'Mathematics': 61, 'Physics': 55, 'Programming': 70},
    'IT001': {'Mathematics': 78, 'Networks': 84},
    'EC001': {'Mathematics': 35, 'Circuits': 48},
}

ATTENDANCE = {
    'CS001': (38, 40),
    'CS002': (29, 40),
    'IT001': (36, 40),
    'EC001': (20, 40),
}

def create_sample_data(manager):
    """Seed students, marks and attendance; existing rolls are skipped"""
    created = 0
    for data in STUDENTS:
        student = manager.find_by_roll(data['roll'])
        if student is not None:
            continue
        student = manager.add_student(**data)
        for subject, score in MARKS.get(data['roll'], {}).items():
            manager.add_or_update_mark(student.id, subject, score)
        present, total = ATTENDANCE.get(data['roll'], (0, 0))
        manager.update_attendance(student.id, present, total)
        created += 1
    return created

if __name__ == '__main__':
    manager = create_manager()
    print("Creating sample data...")
    count = create_sample_data(manager)
    print(f"✓ Created {count} students")
    print(manager.build_summary_report())
