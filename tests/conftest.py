import pytest

from app.services.gradebook_service import GradebookService

SAMPLE_WEIGHTS = {"Math": 0.5, "English": 0.3, "Science": 0.2}

SAMPLE_GRADES = [
    ("Alice", "Math", 90), ("Alice", "English", 80), ("Alice", "Science", 70),
    ("Bob", "Math", 60), ("Bob", "English", 70), ("Bob", "Science", 80),
    ("Charlie", "Math", 50), ("Charlie", "English", 40), ("Charlie", "Science", 30),
]


@pytest.fixture
def gradebook():
    """三名学生、三个科目的成绩册，加权总分分别为 83、67、43"""
    service = GradebookService()
    service.set_subject_weights(SAMPLE_WEIGHTS)
    service.add_grades(SAMPLE_GRADES)
    return service
