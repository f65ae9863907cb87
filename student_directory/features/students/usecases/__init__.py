"""Student directory use cases."""

from .create_student_usecase import CreateStudentUseCaseImpl
from .update_student_usecase import UpdateStudentUseCaseImpl

__all__ = [
    "CreateStudentUseCaseImpl",
    "UpdateStudentUseCaseImpl",
]
