"""
成绩导入服务
从CSV文件或DataFrame读取 (学生, 科目, 分数) 记录与科目权重，校验后写入成绩册
"""

import logging
import numbers
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import pandas as pd

from .. import config
from ..repositories.base import InvalidArgumentError
from .gradebook_service import GradebookService

logger = logging.getLogger(__name__)

GRADE_COLUMNS = ['student', 'subject', 'score']
WEIGHT_COLUMNS = ['subject', 'weight']

# 只接受ASCII数字写法
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
DECIMAL_PATTERN = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')


@dataclass
class ImportResult:
    """导入结果"""
    total_rows: int = 0
    imported_rows: int = 0
    students: List[str] = field(default_factory=list)
    subjects: List[str] = field(default_factory=list)


def _parse_int(value, row_number: int) -> int:
    """严格解析整数分数，'85.5'、'abc'、空值均视为格式错误；整值浮点数（如90.0）按整数接受"""
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)

    text = str(value).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        raise InvalidArgumentError(f"第{row_number}行分数格式错误: {value!r}")
    return int(text)


def _parse_float(value, row_number: int) -> float:
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)

    text = str(value).strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        raise InvalidArgumentError(f"第{row_number}行权重格式错误: {value!r}")
    return float(text)


def _require_columns(data: pd.DataFrame, columns: List[str]) -> None:
    missing_columns = [col for col in columns if col not in data.columns]
    if missing_columns:
        raise InvalidArgumentError(f"缺少必需字段: {missing_columns}")


class GradeImportService:
    """成绩导入服务

    整批记录全部校验通过后才写入，任一行不合法时整批不写入。
    """

    def __init__(self, gradebook: GradebookService, encoding: str = config.CSV_ENCODING):
        self.gradebook = gradebook
        self.encoding = encoding

    def parse_grades(self, data: pd.DataFrame) -> List[Tuple[str, str, int]]:
        """
        将DataFrame解析为 (学生, 科目, 分数) 列表

        行号从2开始计，与带表头的CSV文件行号一致。

        Raises:
            InvalidArgumentError: 缺少字段、姓名或科目为空、分数非整数或为负
        """
        _require_columns(data, GRADE_COLUMNS)

        records = []
        for offset, row in enumerate(data[GRADE_COLUMNS].itertuples(index=False), start=2):
            student, subject, raw_score = row
            student = '' if pd.isna(student) else str(student).strip()
            subject = '' if pd.isna(subject) else str(subject).strip()
            if not student or not subject:
                raise InvalidArgumentError(f"第{offset}行学生姓名或科目为空")

            score = _parse_int(raw_score, offset)
            if score < 0:
                raise InvalidArgumentError(f"第{offset}行分数不能为负数: {score}")
            records.append((student, subject, score))

        return records

    def import_grades(self, data: pd.DataFrame) -> ImportResult:
        """校验并写入一批成绩记录"""
        records = self.parse_grades(data)
        self.gradebook.add_grades(records)

        result = ImportResult(
            total_rows=len(data),
            imported_rows=len(records),
            students=list(dict.fromkeys(student for student, _, _ in records)),
            subjects=list(dict.fromkeys(subject for _, subject, _ in records))
        )
        logger.info(
            f"成绩导入完成: {result.imported_rows}/{result.total_rows} 条, "
            f"学生 {len(result.students)} 人, 科目 {len(result.subjects)} 个"
        )
        return result

    def import_grades_csv(self, source: Union[str, object]) -> ImportResult:
        """从CSV文件（路径或文件对象）导入成绩，表头为 student,subject,score"""
        data = pd.read_csv(source, dtype=str, keep_default_na=False, encoding=self.encoding)
        logger.info(f"读取成绩CSV: {len(data)} 行")
        return self.import_grades(data)

    def parse_weights(self, data: pd.DataFrame) -> Dict[str, float]:
        _require_columns(data, WEIGHT_COLUMNS)

        weights = {}
        for offset, (subject, raw_weight) in enumerate(data[WEIGHT_COLUMNS].itertuples(index=False), start=2):
            subject = '' if pd.isna(subject) else str(subject).strip()
            if not subject:
                raise InvalidArgumentError(f"第{offset}行科目为空")
            weights[subject] = _parse_float(raw_weight, offset)
        return weights

    def import_weights(self, data: pd.DataFrame) -> Dict[str, float]:
        """校验并合并写入科目权重"""
        weights = self.parse_weights(data)
        self.gradebook.set_subject_weights(weights)
        return weights

    def import_weights_csv(self, source: Union[str, object]) -> Dict[str, float]:
        """从CSV文件导入科目权重，表头为 subject,weight"""
        data = pd.read_csv(source, dtype=str, keep_default_na=False, encoding=self.encoding)
        return self.import_weights(data)
