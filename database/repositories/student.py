from typing import Any, Optional

from database.models import StudentProfile
from database.repositories.base import BaseRepository


class StudentRepository(BaseRepository):
    def get(self, student_id: Any) -> Optional[StudentProfile]:
        return self.store.get('students', student_id)
