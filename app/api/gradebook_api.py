import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import Dict, List

from app import config
from app.calculation.calculators.distribution_calculator import distribution_to_rows
from app.repositories.base import InvalidArgumentError, StudentNotFoundError
from app.schemas.request_schemas import GradeBatchCreateRequest, GradeCreateRequest, SubjectWeightsRequest
from app.schemas.response_schemas import (
    DistributionItem,
    DistributionResponse,
    GradeResponse,
    GradeWriteResponse,
    PercentileRankResponse,
    StudentListResponse,
    StudentWeightedAverageResponse,
    SubjectRankingItem,
    SubjectStatisticsResponse,
    SubjectWeightsResponse,
    WeightedPercentileRanksResponse,
    WeightedScoreItem,
    WeightedStatisticsResponse
)
from app.services.gradebook_service import GradebookService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["成绩统计API"])


def get_gradebook_service(request: Request) -> GradebookService:
    """获取应用持有的成绩统计服务"""
    return request.app.state.gradebook


def _distribution_response(distribution: Dict[str, int], interval=None) -> DistributionResponse:
    return DistributionResponse(
        total_count=sum(distribution.values()),
        interval=interval,
        distribution=[
            DistributionItem(range=range_key, count=count, percentage=percentage)
            for range_key, count, percentage in distribution_to_rows(distribution)
        ]
    )


# ---- 成绩与权重 ----

@router.post("/grades", response_model=GradeWriteResponse)
async def add_grade(request: GradeCreateRequest,
                    service: GradebookService = Depends(get_gradebook_service)):
    """录入或覆盖单条成绩"""
    try:
        service.add_grade(request.student_name, request.subject, request.score)
        return GradeWriteResponse(message="成绩录入成功", written=1)
    except InvalidArgumentError as e:
        logger.error(f"成绩录入失败: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/grades/batch", response_model=GradeWriteResponse)
async def add_grades(request: GradeBatchCreateRequest,
                     service: GradebookService = Depends(get_gradebook_service)):
    """批量录入成绩，任一记录非法时整批不写入"""
    try:
        written = service.add_grades(
            (grade.student_name, grade.subject, grade.score) for grade in request.grades
        )
        return GradeWriteResponse(message="批量录入成功", written=written)
    except InvalidArgumentError as e:
        logger.error(f"批量录入失败: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/grades/{student_name}/{subject}", response_model=GradeResponse)
async def get_grade(student_name: str, subject: str,
                    service: GradebookService = Depends(get_gradebook_service)):
    """查询单条成绩"""
    return GradeResponse(
        student_name=student_name,
        subject=subject,
        score=service.get_grade(student_name, subject)
    )


@router.put("/weights", response_model=SubjectWeightsResponse)
async def set_weights(request: SubjectWeightsRequest,
                      service: GradebookService = Depends(get_gradebook_service)):
    """合并写入科目权重"""
    try:
        service.set_subject_weights(request.weights)
        return SubjectWeightsResponse(weights=service.get_subject_weights())
    except InvalidArgumentError as e:
        logger.error(f"设置科目权重失败: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/weights", response_model=SubjectWeightsResponse)
async def get_weights(service: GradebookService = Depends(get_gradebook_service)):
    return SubjectWeightsResponse(weights=service.get_subject_weights())


# ---- 单科统计 ----

@router.get("/subjects/{subject}/statistics", response_model=SubjectStatisticsResponse)
async def get_subject_statistics(subject: str,
                                 service: GradebookService = Depends(get_gradebook_service)):
    """单科描述统计"""
    return SubjectStatisticsResponse(**service.subject_statistics(subject))


@router.get("/subjects/{subject}/distribution", response_model=DistributionResponse)
async def get_subject_distribution(
    subject: str,
    interval: int = Query(config.DEFAULT_INTERVAL, description="分数段间隔"),
    service: GradebookService = Depends(get_gradebook_service)
):
    """单科动态间隔分数分布"""
    try:
        distribution = service.subject_grade_distribution(subject, interval)
        return _distribution_response(distribution, interval)
    except InvalidArgumentError as e:
        logger.error(f"计算分数分布失败: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/subjects/{subject}/percentile-rank", response_model=PercentileRankResponse)
async def get_subject_percentile_rank(
    subject: str,
    score: float = Query(..., description="目标分数"),
    service: GradebookService = Depends(get_gradebook_service)
):
    """指定分数在该科目中的百分等级"""
    return PercentileRankResponse(
        subject=subject,
        score=score,
        percentile_rank=service.subject_percentile_rank(subject, score)
    )


@router.get("/subjects/{subject}/ranking", response_model=List[SubjectRankingItem])
async def get_subject_ranking(subject: str,
                              service: GradebookService = Depends(get_gradebook_service)):
    """参加该科目的学生成绩，从高到低排序"""
    return [
        SubjectRankingItem(student_name=student_name, score=score)
        for student_name, score in service.get_sorted_grades_by_subject(subject)
    ]


# ---- 加权总分统计 ----

@router.get("/weighted/statistics", response_model=WeightedStatisticsResponse)
async def get_weighted_statistics(service: GradebookService = Depends(get_gradebook_service)):
    """加权总分描述统计（不舍入）"""
    return WeightedStatisticsResponse(**service.weighted_statistics())


@router.get("/weighted/scores", response_model=List[WeightedScoreItem])
async def get_weighted_scores(service: GradebookService = Depends(get_gradebook_service)):
    """带名次的加权总分列表"""
    return [WeightedScoreItem(**item) for item in service.ranked_weighted_scores()]


@router.get("/weighted/distribution", response_model=DistributionResponse)
async def get_weighted_distribution(service: GradebookService = Depends(get_gradebook_service)):
    """加权总分固定五段分布"""
    return _distribution_response(service.weighted_score_distribution())


@router.get("/weighted/percentile-ranks", response_model=WeightedPercentileRanksResponse)
async def get_weighted_percentile_ranks(service: GradebookService = Depends(get_gradebook_service)):
    return WeightedPercentileRanksResponse(percentile_ranks=service.all_weighted_prs())


@router.get("/weighted/range", response_model=StudentListResponse)
async def find_students_by_score_range(
    min_score: float = Query(..., description="最低加权总分（含）"),
    max_score: float = Query(..., description="最高加权总分（含）"),
    service: GradebookService = Depends(get_gradebook_service)
):
    """查找加权总分在闭区间内的学生"""
    return StudentListResponse(
        min_score=min_score,
        max_score=max_score,
        students=service.find_students_by_score_range(min_score, max_score)
    )


@router.get("/students/{student_name}/weighted-average", response_model=StudentWeightedAverageResponse)
async def get_student_weighted_average(student_name: str,
                                       service: GradebookService = Depends(get_gradebook_service)):
    """单个学生的加权总分"""
    try:
        return StudentWeightedAverageResponse(
            student_name=student_name,
            weighted_average=service.weighted_average(student_name)
        )
    except StudentNotFoundError as e:
        logger.error(f"查询加权总分失败: {str(e)}")
        raise HTTPException(status_code=404, detail=str(e))
