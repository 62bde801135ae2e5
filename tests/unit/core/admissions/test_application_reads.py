#!/usr/bin/env python3
"""
Tests for ApplicationService reads, stats, admin delete and qualified applicants.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from core.admissions import ApplicationService
from core.exceptions import NotFound
from database.models import AdmissionLock
from tests import (
    load, make_session_factory, seed_application, seed_company, seed_course,
    seed_institution, seed_job, seed_job_application, seed_student
)


class TestApplicationReads(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        self.service = ApplicationService(self.session_factory)
        self.student_id = seed_student(self.session_factory)
        self.institution_id = seed_institution(self.session_factory, location='Roma')
        self.course_id = seed_course(
            self.session_factory, self.institution_id, {'min_gpa': 2.5},
            description='Programming fundamentals', duration='4 years', fees='M 20,000'
        )

    def test_get_application_with_stored_display_fields(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        document = self.service.get_application(application_id)

        self.assertEqual(document['course_name'], 'Computer Science')
        self.assertEqual(document['student_name'], 'Thabo Mokoena')
        self.assertEqual(document['student_email'], 'student@example.com')
        self.assertNotIn('course_description', document)

    def test_get_application_enriches_missing_course_fields(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id,
            course_name=None, institution_name=None
        )

        document = self.service.get_application(application_id)

        self.assertEqual(document['course_name'], 'Computer Science')
        self.assertEqual(document['course_description'], 'Programming fundamentals')
        self.assertEqual(document['course_requirements'], {'min_gpa': 2.5})
        self.assertEqual(document['institution_name'], 'National University')

    def test_get_application_without_enrichment(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        document = self.service.get_application(application_id, enrich=False)

        self.assertNotIn('student_name', document)

    def test_enrichment_failure_keeps_the_read(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        with patch('core.admissions.applications.StudentRepository.get', side_effect=RuntimeError("boom")):
            document = self.service.get_application(application_id)

        self.assertEqual(document['id'], application_id)
        self.assertNotIn('student_name', document)

    def test_missing_application(self):
        with self.assertRaises(NotFound):
            self.service.get_application('missing')

    def test_student_admissions_newest_first_with_location(self):
        now = datetime.now(timezone.utc)
        other_course = seed_course(self.session_factory, self.institution_id, {}, name='Maths')
        older = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id,
            status='admitted', created_at=now - timedelta(days=2)
        )
        newer = seed_application(
            self.session_factory, self.student_id, other_course, self.institution_id,
            status='admitted', created_at=now - timedelta(days=1)
        )
        seed_application(
            self.session_factory, self.student_id, other_course, self.institution_id, status='rejected'
        )

        admissions = self.service.get_student_admissions(self.student_id)

        self.assertEqual([a['id'] for a in admissions], [newer, older])
        self.assertTrue(all(a['institution_location'] == 'Roma' for a in admissions))

    def test_listings(self):
        other_student = seed_student(self.session_factory, email='b@example.com', first_name='Lerato')
        seed_application(self.session_factory, self.student_id, self.course_id, self.institution_id)
        seed_application(self.session_factory, other_student, self.course_id, self.institution_id)

        self.assertEqual(len(self.service.get_student_applications(self.student_id)), 1)
        by_course = self.service.get_applications_by_course(self.course_id)
        self.assertEqual(len(by_course), 2)
        self.assertIn('Lerato Mokoena', [a['student_name'] for a in by_course])
        self.assertEqual(len(self.service.get_applications_by_institution(self.institution_id)), 2)
        self.assertEqual(self.service.get_applications_by_institution('elsewhere'), [])

    def test_stats(self):
        other_course = seed_course(self.session_factory, self.institution_id, {}, name='Maths')
        seed_application(self.session_factory, self.student_id, self.course_id, self.institution_id, status='admitted')
        seed_application(self.session_factory, self.student_id, other_course, self.institution_id, status='rejected')
        other_institution = seed_institution(self.session_factory, name='College')
        elsewhere = seed_course(self.session_factory, other_institution, {})
        seed_application(self.session_factory, self.student_id, elsewhere, other_institution)

        self.assertEqual(
            self.service.get_application_stats(self.institution_id),
            {'total': 2, 'pending': 0, 'admitted': 1, 'accepted': 0, 'rejected': 1}
        )
        self.assertEqual(self.service.get_application_stats()['total'], 3)

    def test_delete_application_bumps_lock(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        self.service.delete_application(application_id)

        with self.assertRaises(NotFound):
            self.service.get_application(application_id)
        self.assertIsNotNone(load(self.session_factory, AdmissionLock, self.student_id))

        with self.assertRaises(NotFound):
            self.service.delete_application(application_id)


class TestQualifiedApplicants(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        self.service = ApplicationService(self.session_factory)
        company_id = seed_company(self.session_factory)
        self.job_id = seed_job(self.session_factory, company_id, {'skills': ['Python', 'SQL'], 'min_gpa': 3.0})

        strong = seed_student(self.session_factory, email='strong@example.com')
        partial = seed_student(
            self.session_factory, email='partial@example.com',
            skills=['Python'], education=[{'level': 'bachelors', 'gpa': 3.0}]
        )
        weak = seed_student(self.session_factory, email='weak@example.com', skills=[], education=[])
        for student_id in (weak, partial, strong):
            seed_job_application(self.session_factory, student_id, self.job_id, company_id)

    def test_only_qualified_best_first(self):
        applicants = self.service.get_qualified_applicants(self.job_id)

        # strong: 100; partial: (0.5 * 25 + 25) / 50 -> 75; weak: 0
        self.assertEqual([a['student_email'] for a in applicants], ['strong@example.com', 'partial@example.com'])
        self.assertEqual([a['match_score'] for a in applicants], [100, 75])
        self.assertEqual(applicants[1]['missing_requirements'], ['Skills: SQL'])
        self.assertEqual({m['category'] for m in applicants[0]['matched_categories']}, {'Skills', 'GPA'})

    def test_missing_job(self):
        with self.assertRaises(NotFound):
            self.service.get_qualified_applicants('missing')
