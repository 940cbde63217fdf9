"""
Student store for the Student Performance Tracker
Owns the schema and every read/write against it
"""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from database import db, ConstraintViolation, StorageUnavailable, translate_db_error
from models.student import Student
from models.academic import Subject
from models.marks import Mark
from models.attendance import Attendance

class StudentStore:
    """
    Persistence layer bound to one Flask application.

    Every public method runs in its own session scope: one transaction that
    is committed on success, rolled back on any failure and always released.
    Multi-table writes (student + attendance row, subject + mark) therefore
    either fully apply or leave nothing behind.
    """

    def __init__(self, app):
        self.app = app

    @property
    def logger(self):
        return self.app.logger

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations"""
        with self.app.app_context():
            session = db.session
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                error = translate_db_error(e)
                if isinstance(error, StorageUnavailable):
                    self.logger.error("Storage failure: %s", e)
                else:
                    self.logger.warning("Rejected write: %s", e.orig)
                raise error from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.remove()

    @staticmethod
    def _is_subject_name_conflict(error):
        """True when a ConstraintViolation came from the unique subject name"""
        cause = getattr(error.__cause__, 'orig', None)
        message = str(cause if cause is not None else error)
        return 'subjects.name' in message or 'unique_subject_name' in message

    def _get_or_create(self, operation):
        """
        Run operation in a scope, retrying once if the subject name collided.

        A concurrent writer may create the same subject between our read and
        insert; after the rollback the re-read finds its row. Any other
        constraint violation is raised immediately.
        """
        try:
            with self.session_scope() as session:
                return operation(session)
        except ConstraintViolation as e:
            if not self._is_subject_name_conflict(e):
                raise
            self.logger.warning("Subject name raced with another writer, retrying")
        with self.session_scope() as session:
            return operation(session)

    # Students

    def create_student(self, name, age, course, roll):
        """Insert a student together with its zeroed attendance row"""
        with self.session_scope() as session:
            student = Student(name=name, age=age, course=course, roll=roll)
            student.attendance = Attendance(present=0, total=0)
            session.add(student)
            session.flush()
            record = student.to_record()

        self.logger.info("Created student %s (%s)", record.id, record.roll)
        return record

    def update_student(self, student_id, name=None, age=None, course=None, roll=None):
        """Apply a partial update; False when no such student"""
        with self.session_scope() as session:
            student = session.get(Student, student_id)
            if student is None:
                return False
            student.apply_changes(name=name, age=age, course=course, roll=roll)
            session.flush()
        return True

    def delete_student(self, student_id):
        """Delete a student; marks and attendance go with it"""
        with self.session_scope() as session:
            student = session.get(Student, student_id)
            if student is None:
                return False
            session.delete(student)

        self.logger.info("Deleted student %s", student_id)
        return True

    def get_student(self, student_id):
        with self.session_scope() as session:
            student = session.get(Student, student_id)
            return student.to_record() if student else None

    def get_student_by_roll(self, roll):
        with self.session_scope():
            student = Student.query.filter_by(roll=roll).first()
            return student.to_record() if student else None

    def search_students_by_name(self, query):
        """Case-insensitive substring search ordered by name"""
        with self.session_scope():
            students = Student.query.filter(
                db.func.lower(Student.name).contains(query.lower(), autoescape=True)
            ).order_by(Student.name.asc(), Student.id.asc()).all()
            return [student.to_record() for student in students]

    def list_students(self):
        with self.session_scope():
            return [student.to_record() for student in Student.query.order_by(Student.id.asc()).all()]

    # Subjects

    def _ensure_subject(self, session, name):
        subject = Subject.query.filter_by(name=name).first()
        if subject is None:
            subject = Subject(name=name)
            session.add(subject)
            session.flush()
            self.logger.info("Created subject %r", name)
        return subject

    def ensure_subject(self, name):
        """Return the id of the named subject, creating it if needed"""
        return self._get_or_create(lambda session: self._ensure_subject(session, name).id)

    def list_subjects(self):
        with self.session_scope() as session:
            rows = session.query(Subject.name).order_by(Subject.name.asc()).all()
            return [name for (name,) in rows]

    # Marks

    def upsert_mark(self, student_id, subject_name, score):
        """Insert or overwrite the (student, subject) mark in one transaction"""
        def _upsert(session):
            subject = self._ensure_subject(session, subject_name)
            mark = Mark.query.filter_by(student_id=student_id, subject_id=subject.id).first()
            if mark is None:
                session.add(Mark(student_id=student_id, subject_id=subject.id, score=score))
            else:
                mark.score = score
            session.flush()

        self._get_or_create(_upsert)

    def marks_for_student(self, student_id):
        """Subject name -> score, ordered by subject name"""
        with self.session_scope() as session:
            rows = session.query(Subject.name, Mark.score).join(
                Mark, Mark.subject_id == Subject.id
            ).filter(
                Mark.student_id == student_id
            ).order_by(Subject.name.asc()).all()
            return {name: score for name, score in rows}

    def marks_by_student(self):
        """Student id -> (subject name -> score) for the whole roster in one read"""
        with self.session_scope() as session:
            rows = session.query(Mark.student_id, Subject.name, Mark.score).join(
                Subject, Mark.subject_id == Subject.id
            ).order_by(Mark.student_id.asc(), Subject.name.asc()).all()
            marks = {}
            for student_id, name, score in rows:
                marks.setdefault(student_id, {})[name] = score
            return marks

    # Attendance

    def add_attendance(self, student_id, add_present, add_total):
        """Increment both counters; False when no such student"""
        with self.session_scope() as session:
            updated = Attendance.query.filter_by(student_id=student_id).update(
                {
                    Attendance.present: Attendance.present + add_present,
                    Attendance.total: Attendance.total + add_total
                },
                synchronize_session=False
            )
            if updated:
                return True

            if session.get(Student, student_id) is None:
                return False

            # Row missing for an existing student; recreate it with the increments
            self.logger.warning("Attendance row missing for student %s, recreating", student_id)
            session.add(Attendance(student_id=student_id, present=add_present, total=add_total))
            session.flush()
        return True

    def get_attendance(self, student_id):
        """(present, total), or (0, 0) if no row exists"""
        with self.session_scope():
            attendance = Attendance.query.filter_by(student_id=student_id).first()
            return attendance.as_pair() if attendance else (0, 0)

    def attendance_by_student(self):
        """Student id -> (present, total) for every attendance row"""
        with self.session_scope():
            return {row.student_id: row.as_pair() for row in Attendance.query.all()}
