# 数据精度处理工具
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Union


def round_half_up(value: Union[float, int], decimal_places: int = 1) -> float:
    """
    四舍五入到指定小数位数（远离零方向舍入）

    先将数值放大 10^decimal_places 倍，按二进制浮点的精确值取整后再缩小，
    即 round(value * 10) / 10 的语义，而不是按十进制字面量舍入。

    Args:
        value: 需要舍入的数值
        decimal_places: 小数位数，默认1位

    Returns:
        舍入后的浮点数；NaN与无穷大原样返回
    """
    if math.isnan(value) or math.isinf(value):
        return float(value)
    factor = 10 ** decimal_places
    scaled = Decimal(value * factor).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return float(scaled) / factor
