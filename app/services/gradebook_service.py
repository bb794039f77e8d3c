# 班级成绩统计服务
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .. import config
from ..calculation.calculators.strategy_registry import initialize_calculation_system
from ..calculation.calculators.weighted_calculator import WeightedScoreCalculator
from ..calculation.engine import CalculationEngine
from ..calculation.formulas import (
    calculate_iqr,
    calculate_max,
    calculate_mean,
    calculate_median,
    calculate_min,
    calculate_mode,
    calculate_standard_deviation,
    calculate_variance
)
from ..repositories.grade_repository import GradeRepository
from ..repositories.weight_repository import WeightRepository
from ..utils import round_half_up

logger = logging.getLogger(__name__)


class GradebookService:
    """
    班级成绩统计服务

    持有一个成绩仓库和一个权重仓库，提供成绩录入、单科统计与加权总分统计。
    所有统计每次调用都基于当前数据重新计算，不缓存任何结果。

    单科统计（平均分、中位数、标准差、方差、四分位距）四舍五入到一位小数；
    加权总分相关统计保持原始精度，不做舍入。
    单科统计的样本量等于全部学生数，未参加该科目的学生按0分计入。
    """

    def __init__(self,
                 grade_repository: Optional[GradeRepository] = None,
                 weight_repository: Optional[WeightRepository] = None,
                 engine: Optional[CalculationEngine] = None,
                 decimal_places: int = config.DECIMAL_PLACES):
        self.grades = grade_repository or GradeRepository()
        self.weights = weight_repository or WeightRepository()
        self.engine = engine or initialize_calculation_system()
        self.decimal_places = decimal_places
        self.weighted = WeightedScoreCalculator(self.grades, self.weights)

    # ---- 成绩与权重 ----

    def add_grade(self, student_name: str, subject: str, score: int) -> None:
        self.grades.add_grade(student_name, subject, score)

    def add_grades(self, records: Iterable[Tuple[str, str, int]]) -> int:
        """批量录入成绩，任一记录非法时整批不写入"""
        return self.grades.add_grades(records)

    def get_grade(self, student_name: str, subject: str) -> Optional[int]:
        return self.grades.get_grade(student_name, subject)

    def set_subject_weights(self, weights: Mapping[str, float]) -> None:
        self.weights.set_weights(weights)

    def get_subject_weight(self, subject: str) -> float:
        return self.weights.get_weight(subject)

    def get_subject_weights(self) -> Dict[str, float]:
        return self.weights.get_all_weights()

    def list_students(self) -> List[str]:
        return self.grades.list_students()

    def list_subjects(self) -> List[str]:
        return self.grades.list_subjects()

    def get_sorted_grades_by_subject(self, subject: str) -> List[Tuple[str, int]]:
        """参加该科目的学生成绩，从高到低排序"""
        return self.grades.get_sorted_grades_by_subject(subject)

    # ---- 单科统计 ----

    def _round(self, value: float) -> float:
        return round_half_up(value, self.decimal_places)

    def subject_average(self, subject: str) -> float:
        return self._round(calculate_mean(self.grades.get_scores_for(subject)))

    def subject_median(self, subject: str) -> float:
        return self._round(calculate_median(self.grades.get_scores_for(subject)))

    def subject_variance(self, subject: str) -> float:
        return self._round(calculate_variance(self.grades.get_scores_for(subject)))

    def subject_standard_deviation(self, subject: str) -> float:
        return self._round(calculate_standard_deviation(self.grades.get_scores_for(subject)))

    def subject_iqr(self, subject: str) -> float:
        return self._round(calculate_iqr(self.grades.get_scores_for(subject)))

    def subject_max(self, subject: str) -> int:
        return calculate_max(self.grades.get_scores_for(subject))

    def subject_min(self, subject: str) -> int:
        return calculate_min(self.grades.get_scores_for(subject))

    def subject_mode(self, subject: str) -> List[int]:
        return calculate_mode(self.grades.get_scores_for(subject))

    def subject_percentile_rank(self, subject: str, score: float) -> float:
        """指定分数在该科目全体学生（含未参加者的0分）中的百分等级"""
        result = self.engine.calculate(
            'percentile_rank',
            self.grades.get_scores_for(subject),
            {'score': score}
        )
        return result['percentile_rank']

    def subject_grade_distribution(self, subject: str, interval: int = config.DEFAULT_INTERVAL) -> Dict[str, int]:
        """该科目按动态间隔统计的分数分布"""
        result = self.engine.calculate(
            'interval_distribution',
            self.grades.get_scores_for(subject),
            {'interval': interval}
        )
        return result['distribution']

    def subject_statistics(self, subject: str) -> Dict[str, Any]:
        """单科完整描述统计（经计算引擎执行，舍入规则同单项统计）"""
        logger.debug(f"计算科目统计: {subject}, 学生数={self.grades.student_count()}")
        result = self.engine.calculate(
            'descriptive_statistics',
            self.grades.get_scores_for(subject),
            {'decimal_places': self.decimal_places}
        )
        result['subject'] = subject
        return result

    # ---- 加权总分统计 ----

    def weighted_average(self, student_name: str) -> float:
        return self.weighted.weighted_average(student_name)

    def all_weighted_scores(self) -> List[float]:
        return self.weighted.all_weighted_scores()

    def sorted_weighted_scores(self) -> List[Tuple[str, float]]:
        return self.weighted.sorted_weighted_scores()

    def ranked_weighted_scores(self) -> List[Dict[str, Any]]:
        return self.weighted.ranked_weighted_scores()

    def weighted_average_score(self) -> float:
        return self.weighted.weighted_average_score()

    def weighted_median_score(self) -> float:
        return self.weighted.weighted_median_score()

    def weighted_variance(self) -> float:
        return self.weighted.weighted_variance()

    def weighted_standard_deviation(self) -> float:
        return self.weighted.weighted_standard_deviation()

    def weighted_iqr(self) -> float:
        return self.weighted.weighted_iqr()

    def weighted_max(self) -> float:
        return self.weighted.weighted_max()

    def weighted_min(self) -> float:
        return self.weighted.weighted_min()

    def find_students_by_score_range(self, min_score: float, max_score: float) -> List[str]:
        return self.weighted.find_students_by_score_range(min_score, max_score)

    def all_weighted_prs(self) -> Dict[str, float]:
        return self.weighted.all_weighted_prs()

    def weighted_score_distribution(self) -> Dict[str, int]:
        return self.weighted.weighted_score_distribution()

    def weighted_statistics(self) -> Dict[str, Any]:
        """加权总分完整描述统计（经计算引擎执行，不舍入）"""
        scores = self.weighted.all_weighted_scores()
        result = self.engine.calculate('descriptive_statistics', scores, {})
        result['distribution'] = self.engine.calculate('fixed_band_distribution', scores)['distribution']
        return result
