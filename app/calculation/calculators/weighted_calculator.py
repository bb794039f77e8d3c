# 加权总分计算器
import logging
from typing import Dict, List, Tuple

from ..formulas import (
    calculate_iqr,
    calculate_max,
    calculate_mean,
    calculate_median,
    calculate_min,
    calculate_percentile_rank,
    calculate_standard_deviation,
    calculate_variance
)
from .distribution_calculator import calculate_fixed_distribution
from ...repositories.grade_repository import GradeRepository
from ...repositories.weight_repository import WeightRepository

logger = logging.getLogger(__name__)


class WeightedScoreCalculator:
    """
    加权总分计算器

    学生加权总分 = Σ(分数 × 科目权重) / Σ(科目权重)，两个求和都只覆盖该学生
    实际有成绩的科目：权重表中有但学生未参加的科目不计入分母，
    权重表中没有的科目权重按0.0计。

    加权相关统计均不做舍入。
    """

    def __init__(self, grade_repository: GradeRepository, weight_repository: WeightRepository):
        self.grades = grade_repository
        self.weights = weight_repository

    def weighted_average(self, student_name: str) -> float:
        """
        计算学生的加权总分

        Raises:
            StudentNotFoundError: 学生没有任何成绩记录
        """
        grades = self.grades.get_student_grades(student_name)
        return self._composite(student_name, grades)

    def _composite(self, student_name: str, grades: Dict[str, int]) -> float:
        weighted_total = 0.0
        weight_sum = 0.0
        for subject, score in grades.items():
            weight = self.weights.get_weight(subject)
            weighted_total += score * weight
            weight_sum += weight

        if weight_sum == 0:
            logger.warning(f"学生 {student_name} 所有科目权重之和为0，加权总分按0.0计")
            return 0.0
        return weighted_total / weight_sum

    def sorted_weighted_scores(self) -> List[Tuple[str, float]]:
        """(学生, 加权总分) 按总分降序排列，同分按学生录入顺序"""
        pairs = [
            (student_name, self._composite(student_name, grades))
            for student_name, grades in self.grades.get_all_grades().items()
        ]
        pairs.sort(key=lambda item: item[1], reverse=True)
        return pairs

    def all_weighted_scores(self) -> List[float]:
        """所有学生的加权总分，降序排列"""
        return [score for _, score in self.sorted_weighted_scores()]

    def weighted_average_score(self) -> float:
        """所有学生加权总分的平均值（学生之间等权）"""
        return calculate_mean(self.all_weighted_scores())

    def weighted_median_score(self) -> float:
        return calculate_median(self.all_weighted_scores())

    def weighted_variance(self) -> float:
        return calculate_variance(self.all_weighted_scores())

    def weighted_standard_deviation(self) -> float:
        return calculate_standard_deviation(self.all_weighted_scores())

    def weighted_iqr(self) -> float:
        return calculate_iqr(self.all_weighted_scores())

    def weighted_max(self) -> float:
        return float(calculate_max(self.all_weighted_scores()))

    def weighted_min(self) -> float:
        return float(calculate_min(self.all_weighted_scores()))

    def find_students_by_score_range(self, min_score: float, max_score: float) -> List[str]:
        """查找加权总分在 [min_score, max_score] 闭区间内的学生（按录入顺序）"""
        return [
            student_name
            for student_name, grades in self.grades.get_all_grades().items()
            if min_score <= self._composite(student_name, grades) <= max_score
        ]

    def all_weighted_prs(self) -> Dict[str, float]:
        """每个学生加权总分在全体加权总分中的百分等级"""
        all_scores = self.all_weighted_scores()
        return {
            student_name: calculate_percentile_rank(self._composite(student_name, grades), all_scores)
            for student_name, grades in self.grades.get_all_grades().items()
        }

    def weighted_score_distribution(self) -> Dict[str, int]:
        """加权总分的固定五段分布"""
        return calculate_fixed_distribution(self.all_weighted_scores())

    def ranked_weighted_scores(self) -> List[Dict[str, object]]:
        """
        带名次的加权总分列表，同分并列（1, 2, 2, 4）

        Returns:
            [{'rank': 1, 'student_name': 'Alice', 'weighted_score': 83.0}, ...]
        """
        rankings = []
        for i, (student_name, score) in enumerate(self.sorted_weighted_scores()):
            if i > 0 and rankings[-1]['weighted_score'] == score:
                rank = rankings[-1]['rank']
            else:
                rank = i + 1
            rankings.append({
                'rank': rank,
                'student_name': student_name,
                'weighted_score': score
            })
        return rankings
