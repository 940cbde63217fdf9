"""
Student manager for the Student Performance Tracker
Facade combining store reads/writes with analytics
"""

from database import InvalidInput, NotFound
from models.performance import Performance
from services.analytics_service import AnalyticsService
from utils.validators import (
    validate_text, validate_roll_number, parse_age, parse_score,
    validate_attendance_counts
)

def _require(result):
    """Raise InvalidInput for a failed (ok, message) validation"""
    ok, value = result
    if not ok:
        raise InvalidInput(value)
    return value

class StudentManager:
    """Entry point used by the console front end"""

    def __init__(self, store):
        self.store = store

    @property
    def config(self):
        return self.store.app.config

    # Students

    def add_student(self, name, age, course, roll):
        """Create a student; duplicate roll raises ConstraintViolation"""
        _require(validate_text(name, "Name"))
        age = _require(parse_age(age))
        _require(validate_text(course, "Course"))
        _require(validate_roll_number(roll))
        return self.store.create_student(name.strip(), age, course.strip(), roll.strip())

    def update_student(self, student_id, name=None, age=None, course=None, roll=None):
        """Update only the supplied fields; False when the student does not exist"""
        if name is not None:
            _require(validate_text(name, "Name"))
            name = name.strip()
        if age is not None:
            age = _require(parse_age(age))
        if course is not None:
            _require(validate_text(course, "Course"))
            course = course.strip()
        if roll is not None:
            _require(validate_roll_number(roll))
            roll = roll.strip()
        return self.store.update_student(student_id, name=name, age=age, course=course, roll=roll)

    def delete_student(self, student_id):
        return self.store.delete_student(student_id)

    def find_by_id(self, student_id):
        return self.store.get_student(student_id)

    def find_by_roll(self, roll):
        return self.store.get_student_by_roll(roll)

    def search_by_name(self, query):
        return self.store.search_students_by_name(query)

    def list_students(self):
        return self.store.list_students()

    def require_student(self, student_id):
        """Return the student or raise NotFound"""
        student = self.store.get_student(student_id)
        if student is None:
            raise NotFound(f"Student {student_id} not found")
        return student

    # Subjects and marks

    def list_subjects(self):
        return self.store.list_subjects()

    def add_subject(self, name):
        _require(validate_text(name, "Subject name"))
        return self.store.ensure_subject(name.strip())

    def add_or_update_mark(self, student_id, subject_name, score):
        """Record a mark; False when the student does not exist"""
        _require(validate_text(subject_name, "Subject name"))
        score = _require(parse_score(score))
        if self.store.get_student(student_id) is None:
            return False
        self.store.upsert_mark(student_id, subject_name.strip(), score)
        return True

    def get_performance(self, student_id):
        """Performance for one student, None when the student does not exist"""
        if self.store.get_student(student_id) is None:
            return None
        return Performance.from_marks(self.store.marks_for_student(student_id))

    # Attendance

    def update_attendance(self, student_id, add_present, add_total):
        _require(validate_attendance_counts(add_present, add_total))
        return self.store.add_attendance(student_id, add_present, add_total)

    def get_attendance_percentage(self, student_id):
        present, total = self.store.get_attendance(student_id)
        return AnalyticsService.attendance_ratio(present, total)

    def has_attendance_shortage(self, student_id):
        """Check if student is below the configured attendance threshold; False for unknown students"""
        if self.store.get_student(student_id) is None:
            return False
        return self.get_attendance_percentage(student_id) < self.config['ATTENDANCE_THRESHOLD']

    # Roster-wide views

    def _roster_metrics(self):
        """Fetch the roster once and precompute percentage and attendance per student"""
        students = self.store.list_students()
        marks = self.store.marks_by_student()
        attendance = self.store.attendance_by_student()

        percentage_of = {}
        attendance_of = {}
        for student in students:
            percentage_of[student.id] = AnalyticsService.percentage(marks.get(student.id, {}))
            present, total = attendance.get(student.id, (0, 0))
            attendance_of[student.id] = AnalyticsService.attendance_ratio(present, total)
        return students, percentage_of, attendance_of

    def get_ranked_students(self):
        students, percentage_of, attendance_of = self._roster_metrics()
        return AnalyticsService.rank(students, percentage_of, attendance_of)

    def _overview_rows(self, students, percentage_of, attendance_of):
        rows = []
        for student in students:
            percentage = percentage_of[student.id]
            rows.append({
                'id': student.id,
                'name': student.name,
                'roll': student.roll,
                'percentage': percentage,
                'grade': AnalyticsService.grade(percentage),
                'attendance': attendance_of[student.id]
            })
        return rows

    def get_top_performers(self, count=None):
        """First count ranked students with their metrics"""
        if count is None:
            count = self.config['DEFAULT_TOP_COUNT']
        if count <= 0:
            return []

        students, percentage_of, attendance_of = self._roster_metrics()
        ranked = AnalyticsService.rank(students, percentage_of, attendance_of)[:count]
        rows = self._overview_rows(ranked, percentage_of, attendance_of)
        for rank, row in enumerate(rows, 1):
            row['rank'] = rank
        return rows

    def get_student_overview(self):
        """Percentage, grade and attendance for every student in id order"""
        students, percentage_of, attendance_of = self._roster_metrics()
        return self._overview_rows(students, percentage_of, attendance_of)

    # Reports

    def get_result_card(self, student_id):
        """Identity, performance and attendance for one student, or None"""
        student = self.store.get_student(student_id)
        if student is None:
            return None

        performance = Performance.from_marks(self.store.marks_for_student(student_id))
        present, total = self.store.get_attendance(student_id)
        attendance = AnalyticsService.attendance_ratio(present, total)
        return {
            'student': student,
            'performance': performance,
            'present': present,
            'total': total,
            'attendance': attendance,
            'attendance_shortage': attendance < self.config['ATTENDANCE_THRESHOLD']
        }

    def build_result_card(self, student_id):
        """Formatted result card text, or None when the student does not exist"""
        card = self.get_result_card(student_id)
        if card is None:
            return None

        student = card['student']
        performance = card['performance']
        lines = [
            "===== RESULT CARD =====",
            f"ID: {student.id}",
            f"Name: {student.name}",
            f"Age: {student.age}",
            f"Course: {student.course}",
            f"Roll: {student.roll}",
            "-----------------------",
        ]
        if performance.marks:
            for subject, score in performance.marks.items():
                lines.append(f"{subject}: {score:.2f}")
        else:
            lines.append("No marks recorded.")
        lines.extend([
            "-----------------------",
            f"Total: {performance.total:.2f}",
            f"Percentage: {performance.percentage:.2f}%",
            f"Grade: {performance.grade}",
            f"Attendance: {card['attendance']:.2f}% ({card['present']}/{card['total']})",
        ])
        if card['attendance_shortage']:
            lines.append(f"Warning: Attendance below {self.config['ATTENDANCE_THRESHOLD']}%.")
        lines.append("=======================")
        return "\n".join(lines)

    def get_summary_stats(self):
        """Class-wide aggregates over the current roster"""
        students, percentage_of, attendance_of = self._roster_metrics()
        top = AnalyticsService.top_scorer(students, percentage_of)
        return {
            'total_students': len(students),
            'class_average': AnalyticsService.class_average(students, percentage_of),
            'pass_count': AnalyticsService.pass_count(
                students, percentage_of, self.config['PASS_THRESHOLD']
            ),
            'top_scorer': top,
            'top_percentage': percentage_of[top.id] if top else 0.0,
            'average_attendance': AnalyticsService.average_attendance(students, attendance_of)
        }

    def build_summary_report(self):
        stats = self.get_summary_stats()
        top = stats['top_scorer']
        top_line = (f"{top.name} (ID {top.id}, {stats['top_percentage']:.2f}%)"
                    if top else "N/A")
        return "\n".join([
            "===== SUMMARY REPORT =====",
            f"Total Students: {stats['total_students']}",
            f"Class Average: {stats['class_average']:.2f}%",
            f"Passed (>= {self.config['PASS_THRESHOLD']:.0f}%): {stats['pass_count']}",
            f"Top Scorer: {top_line}",
            f"Average Attendance: {stats['average_attendance']:.2f}%",
            "==========================",
        ])
