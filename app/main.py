import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import config
from app.api.gradebook_api import router as gradebook_router
from app.services.gradebook_service import GradebookService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def create_app(service: Optional[GradebookService] = None) -> FastAPI:
    """创建应用，每个应用实例持有一份独立的成绩册"""
    app = FastAPI(
        title="班级成绩统计服务",
        description="班级成绩录入与统计分析API文档",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.gradebook = service or GradebookService()

    # 注册路由
    app.include_router(gradebook_router, prefix="/api/v1/gradebook", tags=["成绩统计API"])

    @app.get("/")
    async def root():
        return {
            "message": "班级成绩统计服务",
            "version": "1.0.0",
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=config.API_HOST, port=config.API_PORT, reload=False)
