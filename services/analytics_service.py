"""
Analytics service for the Student Performance Tracker
Pure computations over already-fetched marks and attendance
"""

GRADE_BANDS = (
    (90, 'A+'),
    (80, 'A'),
    (70, 'B+'),
    (60, 'B'),
    (50, 'C'),
)

class AnalyticsService:
    """Side-effect-free percentage, grade, ranking and class aggregates"""

    @staticmethod
    def percentage(marks):
        """Mean of the subject scores, 0 when there are none"""
        if not marks:
            return 0.0
        return sum(marks.values()) / len(marks)

    @staticmethod
    def grade(percentage):
        """Calculate grade based on percentage"""
        for threshold, grade in GRADE_BANDS:
            if percentage >= threshold:
                return grade
        return 'F'

    @staticmethod
    def attendance_ratio(present, total):
        """Attendance as a percentage, 0 when no classes were held"""
        if total == 0:
            return 0.0
        return present * 100.0 / total

    @staticmethod
    def get_rank_key(percentage, attendance):
        """Sort key: percentage descending, then attendance descending"""
        return (-percentage, -attendance)

    @staticmethod
    def rank(students, percentage_of, attendance_of):
        """
        Order students by percentage, breaking ties on attendance ratio.

        percentage_of and attendance_of map student id to a precomputed value.
        The sort is stable, so students equal on both keys keep their
        listing order.
        """
        return sorted(
            students,
            key=lambda student: AnalyticsService.get_rank_key(
                percentage_of[student.id], attendance_of[student.id]
            )
        )

    @staticmethod
    def class_average(students, percentage_of):
        """Mean percentage across the roster, 0 for an empty roster"""
        if not students:
            return 0.0
        return sum(percentage_of[student.id] for student in students) / len(students)

    @staticmethod
    def pass_count(students, percentage_of, threshold=50.0):
        """Number of students at or above the pass threshold"""
        return sum(1 for student in students if percentage_of[student.id] >= threshold)

    @staticmethod
    def top_scorer(students, percentage_of):
        """Student with the strictly highest percentage; the first one wins ties"""
        best = None
        best_percentage = None
        for student in students:
            percentage = percentage_of[student.id]
            if best is None or percentage > best_percentage:
                best = student
                best_percentage = percentage
        return best

    @staticmethod
    def average_attendance(students, attendance_of):
        """Mean attendance ratio across the roster, 0 for an empty roster"""
        if not students:
            return 0.0
        return sum(attendance_of[student.id] for student in students) / len(students)
