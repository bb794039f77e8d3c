from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List


class GradeCreateRequest(BaseModel):
    """录入成绩请求模型

    姓名、科目的非空校验与分数的非负校验由成绩仓库统一执行。
    """
    student_name: str = Field(..., description="学生姓名", max_length=100)
    subject: str = Field(..., description="科目名称", max_length=100)
    score: int = Field(..., description="分数（非负整数）")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "student_name": "Alice",
                "subject": "Math",
                "score": 90
            }
        }
    )


class GradeBatchCreateRequest(BaseModel):
    """批量录入成绩请求模型"""
    grades: List[GradeCreateRequest] = Field(..., description="成绩记录列表", min_length=1)


class SubjectWeightsRequest(BaseModel):
    """设置科目权重请求模型（合并写入）"""
    weights: Dict[str, float] = Field(..., description="科目名称 -> 权重")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "weights": {"Math": 0.5, "English": 0.3, "Science": 0.2}
            }
        }
    )
