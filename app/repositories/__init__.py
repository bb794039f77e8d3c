# 成绩与权重仓库
from .base import GradebookError, InvalidArgumentError, StudentNotFoundError
from .grade_repository import GradeRepository
from .weight_repository import WeightRepository

__all__ = [
    'GradebookError',
    'InvalidArgumentError',
    'StudentNotFoundError',
    'GradeRepository',
    'WeightRepository'
]
