# 科目权重仓库
import logging
import numbers
import math
from typing import Dict, Mapping

from .base import BaseRepository, InvalidArgumentError

logger = logging.getLogger(__name__)


class WeightRepository(BaseRepository):
    """科目权重表：科目名称 -> 非负权重，未配置的科目权重视为0.0"""

    def __init__(self):
        super().__init__()
        self._weights: Dict[str, float] = {}

    def set_weights(self, weights: Mapping[str, float]) -> None:
        """
        合并写入科目权重（覆盖已存在的科目，保留其他科目）

        整批校验通过后才写入，任一权重非法时不做任何修改。
        """
        validated = {}
        for subject, weight in weights.items():
            subject = self._require_name(subject, "科目名称")
            if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
                raise InvalidArgumentError(f"科目 {subject} 的权重必须为数值: {weight!r}")
            if math.isnan(weight) or math.isinf(weight) or weight < 0:
                raise InvalidArgumentError(f"科目 {subject} 的权重无效: {weight}")
            validated[subject] = float(weight)

        with self._lock:
            self._weights.update(validated)
        logger.info(f"已更新科目权重: {validated}")

    def get_weight(self, subject: str) -> float:
        """获取科目权重，未配置时返回0.0"""
        with self._lock:
            return self._weights.get(self._normalize_name(subject), 0.0)

    def get_all_weights(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._weights)
