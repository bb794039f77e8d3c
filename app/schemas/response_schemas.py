from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union


Number = Union[int, float]


class GradeResponse(BaseModel):
    """成绩查询响应模型"""
    student_name: str
    subject: str
    score: Optional[int] = Field(None, description="分数，未录入时为空")


class GradeWriteResponse(BaseModel):
    """成绩写入响应模型"""
    message: str
    written: int = Field(..., ge=0, description="写入记录数")


class SubjectWeightsResponse(BaseModel):
    """科目权重响应模型"""
    weights: Dict[str, float]


class DescriptiveStatistics(BaseModel):
    """描述统计模型"""
    count: int = Field(..., description="样本量")
    mean: float = Field(..., description="平均分")
    median: float = Field(..., description="中位数")
    variance: float = Field(..., description="总体方差")
    std: float = Field(..., description="总体标准差")
    q1: float = Field(..., description="第一四分位数")
    q3: float = Field(..., description="第三四分位数")
    iqr: float = Field(..., description="四分位距")
    max: Number = Field(..., description="最高分")
    min: Number = Field(..., description="最低分")
    mode: List[Number] = Field(default_factory=list, description="众数")


class SubjectStatisticsResponse(DescriptiveStatistics):
    """单科统计响应模型（平均分等已舍入到一位小数）"""
    subject: str


class WeightedStatisticsResponse(DescriptiveStatistics):
    """加权总分统计响应模型（不舍入）"""
    distribution: Dict[str, int] = Field(..., description="固定五段分布")


class DistributionItem(BaseModel):
    """分数段统计项"""
    range: str = Field(..., description="分数段，如 60-69")
    count: int = Field(..., ge=0, description="人数")
    percentage: float = Field(..., ge=0.0, le=1.0, description="占比")


class DistributionResponse(BaseModel):
    """分数分布响应模型"""
    total_count: int
    interval: Optional[int] = Field(None, description="分数段间隔，固定分段时为空")
    distribution: List[DistributionItem]


class PercentileRankResponse(BaseModel):
    """百分等级响应模型"""
    subject: str
    score: float
    percentile_rank: float = Field(..., ge=0.0, le=100.0)


class SubjectRankingItem(BaseModel):
    student_name: str
    score: int


class WeightedScoreItem(BaseModel):
    """加权总分排名项"""
    rank: int = Field(..., ge=1)
    student_name: str
    weighted_score: float


class StudentWeightedAverageResponse(BaseModel):
    student_name: str
    weighted_average: float


class WeightedPercentileRanksResponse(BaseModel):
    percentile_ranks: Dict[str, float]


class StudentListResponse(BaseModel):
    min_score: float
    max_score: float
    students: List[str]
