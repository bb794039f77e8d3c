# 学生成绩仓库
import logging
import numbers
from typing import Dict, Iterable, List, Optional, Tuple

from .base import BaseRepository, InvalidArgumentError, StudentNotFoundError

logger = logging.getLogger(__name__)


class GradeRepository(BaseRepository):
    """学生成绩仓库：学生姓名 -> {科目: 分数}

    学生与科目均按首次写入顺序迭代，所有按分数排序的输出
    以该顺序作为并列时的次序。
    """

    def __init__(self):
        super().__init__()
        self._grades: Dict[str, Dict[str, int]] = {}

    def _validate_record(self, student_name: str, subject: str, score: int) -> Tuple[str, str, int]:
        student_name = self._require_name(student_name, "学生姓名")
        subject = self._require_name(subject, "科目名称")
        if isinstance(score, bool) or not isinstance(score, numbers.Integral):
            raise InvalidArgumentError(f"分数必须为整数: {score!r}")
        if score < 0:
            raise InvalidArgumentError(f"分数不能为负数: {score}")
        return student_name, subject, int(score)

    def add_grade(self, student_name: str, subject: str, score: int) -> None:
        """
        添加或覆盖成绩

        Args:
            student_name: 学生姓名
            subject: 科目名称
            score: 非负整数分数

        Raises:
            InvalidArgumentError: 姓名或科目为空，或分数非法
        """
        student_name, subject, score = self._validate_record(student_name, subject, score)
        with self._lock:
            self._grades.setdefault(student_name, {})[subject] = score
        logger.debug(f"已记录成绩: {student_name}/{subject}={score}")

    def get_grade(self, student_name: str, subject: str) -> Optional[int]:
        """查询成绩，不存在时返回None"""
        with self._lock:
            return self._grades.get(self._normalize_name(student_name), {}).get(self._normalize_name(subject))

    def add_grades(self, records: Iterable[Tuple[str, str, int]]) -> int:
        """
        批量添加成绩，全部记录校验通过后才写入

        Returns:
            写入的记录数
        """
        validated = [self._validate_record(*record) for record in records]
        with self._lock:
            for student_name, subject, score in validated:
                self._grades.setdefault(student_name, {})[subject] = score
        logger.info(f"批量记录成绩: {len(validated)} 条")
        return len(validated)

    def get_scores_for(self, subject: str) -> List[int]:
        """获取某科目所有学生的分数，未参加该科目的学生计为0分"""
        subject = self._normalize_name(subject)
        with self._lock:
            return [grades.get(subject, 0) for grades in self._grades.values()]

    def get_student_grades(self, student_name: str) -> Dict[str, int]:
        """获取单个学生的全部成绩副本"""
        student_name = self._normalize_name(student_name)
        with self._lock:
            if student_name not in self._grades:
                raise StudentNotFoundError(student_name)
            return dict(self._grades[student_name])

    def get_all_grades(self) -> Dict[str, Dict[str, int]]:
        """获取全部成绩的副本"""
        with self._lock:
            return {name: dict(grades) for name, grades in self._grades.items()}

    def get_sorted_grades_by_subject(self, subject: str) -> List[Tuple[str, int]]:
        """获取参加该科目的学生成绩，按分数从高到低排序"""
        subject = self._normalize_name(subject)
        with self._lock:
            entries = [
                (name, grades[subject])
                for name, grades in self._grades.items()
                if subject in grades
            ]
        entries.sort(key=lambda item: item[1], reverse=True)
        return entries

    def has_student(self, student_name: str) -> bool:
        with self._lock:
            return self._normalize_name(student_name) in self._grades

    def list_students(self) -> List[str]:
        with self._lock:
            return list(self._grades.keys())

    def list_subjects(self) -> List[str]:
        """列出出现过的全部科目（按首次出现顺序）"""
        with self._lock:
            subjects: Dict[str, None] = {}
            for grades in self._grades.values():
                for subject in grades:
                    subjects.setdefault(subject, None)
            return list(subjects)

    def student_count(self) -> int:
        with self._lock:
            return len(self._grades)
