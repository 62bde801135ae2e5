from typing import Optional

from pydantic import BaseModel

APPLICATION_SUBMITTED = 'application_submitted'
APPLICATION_UPDATE = 'application_update'
ADMISSION_SELECTED = 'admission_selected'
JOB_APPLICATION_SUBMITTED = 'job_application_submitted'
JOB_APPLICATION_UPDATE = 'job_application_update'


class NotificationContent(BaseModel):
    type: str
    title: str
    message: str


def _or(value: Optional[str], fallback: str) -> str:
    return value or fallback


class NotificationMessageBuilder:
    """Builds user-facing notification texts for application events."""

    @staticmethod
    def application_submitted(course_name: Optional[str]) -> NotificationContent:
        return NotificationContent(
            type=APPLICATION_SUBMITTED,
            title="Application Submitted",
            message=f"Your application for {_or(course_name, 'the course')} has been submitted successfully."
        )

    @staticmethod
    def application_status(
        status: str,
        course_name: Optional[str],
        institution_name: Optional[str]
    ) -> NotificationContent:
        course = _or(course_name, 'the course')
        institution = _or(institution_name, 'the institution')

        if status == 'admitted':
            message = f"Congratulations! You have been admitted to {course} at {institution}."
        elif status == 'rejected':
            message = f"Your application for {course} at {institution} was not successful."
        else:
            message = f"Your application for {course} has been updated to {status}."

        return NotificationContent(
            type=APPLICATION_UPDATE,
            title="Application Status Update",
            message=message
        )

    @staticmethod
    def admission_selected(course_name: Optional[str], declined_count: int) -> NotificationContent:
        message = f"You have successfully selected your admission for {_or(course_name, 'the course')}."
        if declined_count == 1:
            message += " 1 other offer has been automatically declined."
        elif declined_count > 1:
            message += f" {declined_count} other offers have been automatically declined."

        return NotificationContent(
            type=ADMISSION_SELECTED,
            title="Admission Selected",
            message=message
        )

    @staticmethod
    def job_application_submitted(job_title: Optional[str], company_name: Optional[str]) -> NotificationContent:
        return NotificationContent(
            type=JOB_APPLICATION_SUBMITTED,
            title="Job Application Submitted",
            message=(
                f"Your application for {_or(job_title, 'the job')} at "
                f"{_or(company_name, 'the company')} has been submitted successfully."
            )
        )

    @staticmethod
    def job_application_status(
        status: str,
        job_title: Optional[str],
        company_name: Optional[str]
    ) -> NotificationContent:
        job = _or(job_title, 'the job')
        company = _or(company_name, 'the company')

        if status == 'shortlisted':
            message = f"Good news! You have been shortlisted for {job} at {company}."
        elif status == 'interview':
            message = f"{company} would like to interview you for {job}."
        elif status == 'rejected':
            message = f"Your application for {job} at {company} was not successful."
        else:
            message = f"Your application for {job} has been updated to {status}."

        return NotificationContent(
            type=JOB_APPLICATION_UPDATE,
            title="Job Application Update",
            message=message
        )
