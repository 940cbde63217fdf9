"""
Unit tests for the student store
"""

import unittest
from app import create_app
from config import TestingConfig
from database import db, ConstraintViolation, StorageUnavailable
from models import Subject, Mark, Attendance, Student
from services.student_store import StudentStore

class BrokenConfig(TestingConfig):
    SQLALCHEMY_DATABASE_URI = 'sqlite:////nonexistent-directory/missing/students.db'

class TestStudentStore(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.app = create_app(TestingConfig)
        self.store = StudentStore(self.app)

    def tearDown(self):
        """Clean up after tests"""
        with self.app.app_context():
            db.session.remove()
            db.drop_all()

    def _count(self, model):
        with self.store.session_scope():
            return model.query.count()

    def _add(self, name='Alice Johnson', roll='CS001', age=19, course='Computer Science'):
        return self.store.create_student(name, age, course, roll)

    def test_create_and_get_student(self):
        """Created students can be read back by id and roll"""
        record = self._add()

        self.assertIsNotNone(record.id)
        self.assertEqual(self.store.get_student(record.id), record)
        self.assertEqual(self.store.get_student_by_roll('CS001'), record)
        self.assertEqual(self.store.get_attendance(record.id), (0, 0))
        self.assertEqual(self._count(Attendance), 1)

    def test_missing_student_lookups(self):
        self.assertIsNone(self.store.get_student(999))
        self.assertIsNone(self.store.get_student_by_roll('NOPE'))

    def test_duplicate_roll_leaves_no_partial_rows(self):
        """A rejected insert creates neither a student nor an attendance row"""
        self._add()

        with self.assertRaises(ConstraintViolation):
            self._add(name='Bob Smith')

        self.assertEqual(self._count(Student), 1)
        self.assertEqual(self._count(Attendance), 1)

    def test_partial_update(self):
        """Only supplied fields change"""
        record = self._add()

        self.assertTrue(self.store.update_student(record.id, age=20, course='Mathematics'))

        updated = self.store.get_student(record.id)
        self.assertEqual(updated.name, 'Alice Johnson')
        self.assertEqual(updated.age, 20)
        self.assertEqual(updated.course, 'Mathematics')
        self.assertEqual(updated.roll, 'CS001')

    def test_update_missing_student(self):
        self.assertFalse(self.store.update_student(999, name='Nobody'))

    def test_update_roll_collision(self):
        """Taking another student's roll is rejected and nothing changes"""
        self._add()
        other = self._add(name='Bob Smith', roll='CS002')

        with self.assertRaises(ConstraintViolation):
            self.store.update_student(other.id, name='Robert Smith', roll='CS001')

        self.assertEqual(self.store.get_student(other.id), other)

    def test_update_keeping_own_roll(self):
        record = self._add()

        self.assertTrue(self.store.update_student(record.id, roll='CS001'))

    def test_delete_cascades(self):
        """Deleting a student removes its marks and attendance row"""
        record = self._add()
        self.store.upsert_mark(record.id, 'Math', 70)
        self.store.add_attendance(record.id, 5, 6)

        self.assertTrue(self.store.delete_student(record.id))

        self.assertIsNone(self.store.get_student(record.id))
        self.assertEqual(self.store.get_attendance(record.id), (0, 0))
        self.assertEqual(self.store.marks_for_student(record.id), {})
        self.assertEqual(self._count(Mark), 0)
        self.assertEqual(self._count(Attendance), 0)
        self.assertEqual(self.store.list_subjects(), ['Math'])

    def test_delete_missing_student(self):
        self.assertFalse(self.store.delete_student(999))

    def test_search_by_name(self):
        """Case-insensitive substring match ordered by name"""
        self._add(name='Sally Alder', roll='R1')
        self._add(name='Alan Ray', roll='R2')
        self._add(name='Bob Stone', roll='R3')

        names = [s.name for s in self.store.search_students_by_name('aL')]

        self.assertEqual(names, ['Alan Ray', 'Sally Alder'])
        self.assertEqual(self.store.search_students_by_name('xyz'), [])

    def test_search_treats_wildcards_literally(self):
        self._add(name='Alice', roll='R1')

        self.assertEqual(self.store.search_students_by_name('%'), [])

    def test_list_students_in_id_order(self):
        first = self._add(name='Zed', roll='R1')
        second = self._add(name='Amy', roll='R2')

        self.assertEqual([s.id for s in self.store.list_students()], [first.id, second.id])

    def test_ensure_subject_is_idempotent(self):
        """Ensuring a subject twice yields one row and the same id"""
        first = self.store.ensure_subject('Math')
        second = self.store.ensure_subject('Math')

        self.assertEqual(first, second)
        with self.store.session_scope():
            self.assertEqual(Subject.query.filter_by(name='Math').count(), 1)

    def test_subject_names_are_case_sensitive(self):
        self.assertNotEqual(self.store.ensure_subject('Math'), self.store.ensure_subject('math'))
        self.assertEqual(self.store.list_subjects(), ['Math', 'math'])

    def test_ensure_subject_recovers_from_race(self):
        """A unique violation during creation is retried and re-read"""
        existing = self.store.ensure_subject('Math')
        calls = []

        def operation(session):
            calls.append(1)
            if len(calls) == 1:
                # Another writer's row collides with ours
                session.add(Subject(name='Math'))
                session.flush()
            return self.store._ensure_subject(session, 'Math').id

        self.assertEqual(self.store._get_or_create(operation), existing)
        self.assertEqual(len(calls), 2)

    def test_upsert_replaces_score(self):
        """Second write to the same pair overwrites the first"""
        record = self._add()
        self.store.upsert_mark(record.id, 'Math', 70)
        self.store.upsert_mark(record.id, 'Math', 85)

        self.assertEqual(self.store.marks_for_student(record.id), {'Math': 85.0})
        self.assertEqual(self._count(Mark), 1)
        self.assertEqual(self._count(Subject), 1)

    def test_out_of_range_scores_are_stored(self):
        record = self._add()
        self.store.upsert_mark(record.id, 'Math', 120)
        self.store.upsert_mark(record.id, 'Art', -5)

        self.assertEqual(self.store.marks_for_student(record.id), {'Art': -5.0, 'Math': 120.0})

    def test_marks_ordered_by_subject(self):
        record = self._add()
        for subject, score in (('Physics', 60), ('Biology', 75), ('Math', 90)):
            self.store.upsert_mark(record.id, subject, score)

        self.assertEqual(list(self.store.marks_for_student(record.id)), ['Biology', 'Math', 'Physics'])
        self.assertEqual(self.store.list_subjects(), ['Biology', 'Math', 'Physics'])

    def test_upsert_for_missing_student_is_rejected(self):
        """Foreign keys reject marks for unknown students without leaving a subject"""
        with self.assertRaises(ConstraintViolation):
            self.store.upsert_mark(999, 'Math', 70)

        self.assertEqual(self.store.list_subjects(), [])

    def test_missing_student_is_not_retried(self):
        """Only a subject name collision triggers the retry"""
        with self.assertLogs(self.app.logger, level='WARNING') as logs:
            with self.assertRaises(ConstraintViolation):
                self.store.upsert_mark(999, 'Math', 70)

        rejected = [line for line in logs.output if 'Rejected write' in line]
        self.assertEqual(len(rejected), 1)
        self.assertFalse(any('retrying' in line for line in logs.output))

    def test_marks_by_student(self):
        alice = self._add()
        bob = self._add(name='Bob Smith', roll='CS002')
        self.store.upsert_mark(alice.id, 'Math', 90)
        self.store.upsert_mark(bob.id, 'Math', 40)
        self.store.upsert_mark(bob.id, 'Art', 60)

        self.assertEqual(self.store.marks_by_student(), {
            alice.id: {'Math': 90.0},
            bob.id: {'Art': 60.0, 'Math': 40.0}
        })

    def test_attendance_accumulates(self):
        """Increments add up and never overwrite"""
        record = self._add()

        self.assertTrue(self.store.add_attendance(record.id, 18, 20))
        self.assertTrue(self.store.add_attendance(record.id, 2, 0))

        self.assertEqual(self.store.get_attendance(record.id), (20, 20))
        self.assertEqual(self.store.attendance_by_student(), {record.id: (20, 20)})

    def test_attendance_for_missing_student(self):
        self.assertFalse(self.store.add_attendance(999, 1, 1))
        self.assertEqual(self.store.get_attendance(999), (0, 0))
        self.assertEqual(self._count(Attendance), 0)

    def test_attendance_row_recreated_when_missing(self):
        record = self._add()
        with self.store.session_scope():
            Attendance.query.filter_by(student_id=record.id).delete()

        self.assertTrue(self.store.add_attendance(record.id, 3, 4))
        self.assertEqual(self.store.get_attendance(record.id), (3, 4))

    def test_schema_reapplied_idempotently(self):
        """Re-running initialization keeps existing data"""
        from database import init_db
        record = self._add()

        init_db(self.app)

        self.assertEqual(self.store.get_student(record.id), record)

    def test_storage_unavailable(self):
        """An unreachable database surfaces as StorageUnavailable"""
        with self.assertRaises(StorageUnavailable):
            create_app(BrokenConfig)

if __name__ == '__main__':
    unittest.main()
