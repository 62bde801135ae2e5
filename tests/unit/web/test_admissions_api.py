#!/usr/bin/env python3
"""
API tests for the admissions endpoints, run against an in-memory database.
"""

import unittest

from fastapi.testclient import TestClient

from web.backend.app import app
from web.backend.dependencies import get_session_factory
from web.backend.exceptions import status_code_for
from core.exceptions import (
    AlreadyApplied, InvalidSelection, InvalidTransition, NotFound, NotQualified,
    SelectionUnauthorized, StoreConflict
)
from tests import (
    make_session_factory, seed_application, seed_company, seed_course,
    seed_institution, seed_job, seed_student
)


class AdmissionsApiTestCase(unittest.TestCase):

    def setUp(self):
        self.session_factory = make_session_factory()
        app.dependency_overrides[get_session_factory] = lambda: self.session_factory
        self.client = TestClient(app)

        self.student_id = seed_student(self.session_factory)
        self.institution_id = seed_institution(self.session_factory)
        self.course_id = seed_course(self.session_factory, self.institution_id, {'min_gpa': 3.0})

    def tearDown(self):
        app.dependency_overrides.clear()


class TestApplicationEndpoints(AdmissionsApiTestCase):

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_eligibility(self):
        response = self.client.get("/api/applications/eligibility", params={
            "student_id": self.student_id, "target_id": self.course_id, "kind": "course"
        })

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["can_apply"])
        self.assertEqual(data["current_application_count"], 0)

    def test_apply_then_duplicate(self):
        payload = {"student_id": self.student_id, "target_id": self.course_id, "kind": "course"}

        created = self.client.post("/api/applications", json=payload)
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["status"], "pending")
        self.assertEqual(created.json()["course_name"], "Computer Science")

        duplicate = self.client.post("/api/applications", json=payload)
        self.assertEqual(duplicate.status_code, 409)
        self.assertEqual(duplicate.json()["type"], "AlreadyApplied")

    def test_not_qualified_lists_missing_requirements(self):
        weak = seed_student(self.session_factory, education=[{'level': 'diploma', 'gpa': 2.0}])

        response = self.client.post("/api/applications", json={
            "student_id": weak, "target_id": self.course_id
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["type"], "NotQualified")
        self.assertEqual(len(response.json()["missing_requirements"]), 1)

    def test_unknown_target(self):
        response = self.client.get("/api/applications/eligibility", params={
            "student_id": self.student_id, "target_id": "missing"
        })
        self.assertEqual(response.status_code, 404)

    def test_invalid_kind_is_rejected(self):
        response = self.client.post("/api/applications", json={
            "student_id": self.student_id, "target_id": self.course_id, "kind": "degree"
        })
        self.assertEqual(response.status_code, 422)

    def test_status_update_and_reads(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        response = self.client.patch(f"/api/applications/{application_id}/status", json={
            "status": "admitted", "reviewer": "registrar"
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "admitted")

        invalid = self.client.patch(f"/api/applications/{application_id}/status", json={"status": "accepted"})
        self.assertEqual(invalid.status_code, 400)

        fetched = self.client.get(f"/api/applications/{application_id}")
        self.assertEqual(fetched.json()["student_name"], "Thabo Mokoena")

        stats = self.client.get("/api/applications/stats", params={"institution_id": self.institution_id})
        self.assertEqual(stats.json()["admitted"], 1)

        listed = self.client.get(f"/api/applications/students/{self.student_id}")
        self.assertEqual([a["id"] for a in listed.json()], [application_id])

    def test_delete(self):
        application_id = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id
        )

        self.assertEqual(self.client.delete(f"/api/applications/{application_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/applications/{application_id}").status_code, 404)


class TestAdmissionEndpoints(AdmissionsApiTestCase):

    def test_select_admission(self):
        other_institution = seed_institution(self.session_factory, name='College')
        other_course = seed_course(self.session_factory, other_institution, {})
        chosen = seed_application(
            self.session_factory, self.student_id, self.course_id, self.institution_id, status='admitted'
        )
        declined = seed_application(
            self.session_factory, self.student_id, other_course, other_institution, status='admitted'
        )

        offers = self.client.get(f"/api/admissions/students/{self.student_id}")
        self.assertEqual(len(offers.json()), 2)

        response = self.client.post("/api/admissions/select", json={
            "student_id": self.student_id, "application_id": chosen
        })

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["application"]["status"], "accepted")
        self.assertEqual(data["declined_application_ids"], [declined])
        self.assertEqual(data["declined_count"], 1)

        again = self.client.post("/api/admissions/select", json={
            "student_id": self.student_id, "application_id": chosen
        })
        self.assertEqual(again.status_code, 400)

    def test_select_someone_elses_offer(self):
        other = seed_student(self.session_factory, email='other@example.com')
        theirs = seed_application(
            self.session_factory, other, self.course_id, self.institution_id, status='admitted'
        )

        response = self.client.post("/api/admissions/select", json={
            "student_id": self.student_id, "application_id": theirs
        })

        self.assertEqual(response.status_code, 403)


class TestJobAndNotificationEndpoints(AdmissionsApiTestCase):

    def test_matching_jobs_and_notifications(self):
        company_id = seed_company(self.session_factory)
        job_id = seed_job(self.session_factory, company_id, {'skills': ['Python']})

        matches = self.client.get(f"/api/jobs/matches/{self.student_id}")
        self.assertEqual(matches.status_code, 200)
        self.assertEqual([m["job_id"] for m in matches.json()], [job_id])

        applied = self.client.post("/api/applications", json={
            "student_id": self.student_id, "target_id": job_id, "kind": "job"
        })
        self.assertEqual(applied.status_code, 201)

        qualified = self.client.get(f"/api/jobs/{job_id}/qualified-applicants")
        self.assertEqual(qualified.json()[0]["match_score"], 100)

        review = self.client.patch(f"/api/jobs/applications/{applied.json()['id']}/status", json={
            "status": "shortlisted"
        })
        self.assertEqual(review.json()["status"], "shortlisted")

        notifications = self.client.get(f"/api/notifications/users/{self.student_id}")
        self.assertEqual(len(notifications.json()), 2)
        unread = self.client.get(f"/api/notifications/users/{self.student_id}/unread-count")
        self.assertEqual(unread.json()["unread"], 2)

        first_id = notifications.json()[0]["id"]
        self.assertEqual(self.client.post(f"/api/notifications/{first_id}/read").status_code, 200)
        read_all = self.client.post(f"/api/notifications/users/{self.student_id}/read-all")
        self.assertEqual(read_all.json()["details"]["count"], 1)

        self.assertEqual(self.client.delete(f"/api/notifications/{first_id}").status_code, 200)
        self.assertEqual(self.client.delete(f"/api/notifications/{first_id}").status_code, 404)

    def test_matches_for_unknown_student(self):
        response = self.client.get("/api/jobs/matches/missing")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])


def test_status_code_mapping():
    assert status_code_for(NotFound("x")) == 404
    assert status_code_for(AlreadyApplied("x")) == 409
    assert status_code_for(NotQualified("x")) == 400
    assert status_code_for(InvalidSelection("x")) == 400
    assert status_code_for(InvalidTransition("x")) == 400
    assert status_code_for(SelectionUnauthorized("x")) == 403
    assert status_code_for(StoreConflict("x")) == 503
