"""FastAPI主应用入口

MES 基准信息 / 生产管理接口：
- 工艺路线与工序步骤、BOM 与物料行、生产计划、作业指示、基准信息目录
- 使用依赖注入管理数据库会话与数据存储（MesStore）
- 业务异常统一转换为 {success: false, message} 响应
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1 import (
    boms_router,
    routings_router,
    production_plans_router,
    work_orders_router,
    lines_router,
    processes_router,
    equipments_router,
    materials_router,
    products_router,
)
from .config.settings import settings
from .core.exceptions import MesError
from .core.responses import error_response, failure_response
from .db import engine, init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s 시작 (DB: %s)", settings.APP_TITLE, settings.APP_VERSION, engine.url.drivername)
    yield


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(MesError)
async def mes_error_handler(request: Request, exc: MesError):
    logger.info("%s %s -> %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.message))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    body = error_response("요청 형식이 올바르지 않습니다.")
    body["errors"] = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s 처리 중 오류", request.method, request.url.path)
    return JSONResponse(status_code=500, content=failure_response(str(exc) or exc.__class__.__name__))


# 挂载API路由
app.include_router(boms_router, prefix="/api/mes")
app.include_router(routings_router, prefix="/api/mes")
app.include_router(production_plans_router, prefix="/api/mes")
app.include_router(work_orders_router, prefix="/api/mes")
app.include_router(lines_router, prefix="/api/mes")
app.include_router(processes_router, prefix="/api/mes")
app.include_router(equipments_router, prefix="/api/mes")
app.include_router(materials_router, prefix="/api/mes")
app.include_router(products_router, prefix="/api/mes")


@app.get("/health")
def health():
    """健康检查"""
    return {"status": "ok", "version": settings.APP_VERSION}
