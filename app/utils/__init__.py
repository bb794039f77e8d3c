# 工具模块
from .precision_handler import round_half_up

__all__ = ['round_half_up']
