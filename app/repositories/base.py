# 成绩仓库基础定义
import logging
import threading

logger = logging.getLogger(__name__)


class GradebookError(Exception):
    """成绩册异常基类"""
    pass


class InvalidArgumentError(GradebookError, ValueError):
    """参数无效异常（学生姓名、科目为空，分数或权重非法）"""
    pass


class StudentNotFoundError(GradebookError, KeyError):
    """学生不存在异常"""

    def __init__(self, student_name: str):
        super().__init__(student_name)
        self.student_name = student_name

    def __str__(self) -> str:
        return f"未找到学生: {self.student_name}"


class BaseRepository:
    """内存仓库基类

    映射由可重入锁保护，单键写入可以跨线程并发；
    多步读取之间不提供快照隔离。
    """

    def __init__(self):
        self._lock = threading.RLock()

    @staticmethod
    def _normalize_name(value):
        """姓名与科目去除首尾空白后存储和查询"""
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def _require_name(cls, value, field_name: str) -> str:
        """校验名称字段非空，返回去除首尾空白后的名称"""
        if value is None or not isinstance(value, str) or not value.strip():
            raise InvalidArgumentError(f"{field_name}不能为空")
        return cls._normalize_name(value)
