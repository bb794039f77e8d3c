# 策略注册表
import logging
from typing import Dict, Optional, Type

from ..engine import CalculationEngine, StatisticalStrategy
from ..formulas import DescriptiveStatisticsStrategy, PercentileRankStrategy
from .distribution_calculator import FixedBandDistributionStrategy, IntervalDistributionStrategy

logger = logging.getLogger(__name__)


class CalculationStrategyRegistry:
    """计算策略注册表"""

    def __init__(self):
        self._strategies: Dict[str, Type[StatisticalStrategy]] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, name: str, strategy_class: Type[StatisticalStrategy], description: str = ""):
        """注册计算策略"""
        if not issubclass(strategy_class, StatisticalStrategy):
            raise ValueError(f"策略类 {strategy_class.__name__} 必须继承 StatisticalStrategy")

        self._strategies[name] = strategy_class
        self._descriptions[name] = description or strategy_class.__doc__ or "无描述"
        logger.info(f"已注册计算策略: {name} ({strategy_class.__name__})")

    def get_strategy(self, name: str) -> Type[StatisticalStrategy]:
        """获取策略类"""
        if name not in self._strategies:
            raise ValueError(f"未找到策略: {name}")
        return self._strategies[name]

    def create_strategy(self, name: str) -> StatisticalStrategy:
        """创建策略实例"""
        return self.get_strategy(name)()

    def register_to_engine(self, engine: CalculationEngine):
        """将所有策略注册到计算引擎"""
        for name in self._strategies:
            engine.register_strategy(name, self.create_strategy(name))
            logger.debug(f"策略 {name} 已注册到计算引擎: {self._descriptions[name]}")


def create_default_registry() -> CalculationStrategyRegistry:
    """创建包含默认计算策略的注册表"""
    registry = CalculationStrategyRegistry()

    registry.register(
        'descriptive_statistics',
        DescriptiveStatisticsStrategy,
        '描述性统计：平均数、中位数、总体方差、标准差、四分位距、最值、众数'
    )

    registry.register(
        'percentile_rank',
        PercentileRankStrategy,
        '百分等级：严格低于目标分数的人数占全体的百分比'
    )

    registry.register(
        'fixed_band_distribution',
        FixedBandDistributionStrategy,
        '固定五段分数分布：0-59, 60-69, 70-79, 80-89, 90-100'
    )

    registry.register(
        'interval_distribution',
        IntervalDistributionStrategy,
        '动态间隔分数分布：按指定间隔从最低分段统计到最高分段'
    )

    return registry


def initialize_calculation_system(registry: Optional[CalculationStrategyRegistry] = None) -> CalculationEngine:
    """
    初始化计算系统，返回注册了全部策略的新引擎实例

    Args:
        registry: 策略注册表，默认使用 create_default_registry()
    """
    logger.info("正在初始化计算系统...")

    registry = registry or create_default_registry()
    engine = CalculationEngine()
    registry.register_to_engine(engine)

    logger.info(
        f"计算系统初始化完成，共注册 {len(engine.get_registered_strategies())} 个策略: "
        f"{engine.get_registered_strategies()}"
    )
    return engine
