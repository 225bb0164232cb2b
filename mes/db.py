"""
数据库入口

连接与会话在 database 包中实现；此处负责 MES 表结构的建立与重置。
导入 models 保证全部表已注册到 Base.metadata。
"""

import logging

from . import models  # noqa: F401
from .database.connection import engine, get_db, Base, SessionLocal

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """创建尚不存在的表（基准信息、路线、BOM、计划、作业指示）"""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("MES 테이블 준비 완료: %d개", len(Base.metadata.tables))


def reset_db(bind=None):
    """删除并重建全部表，数据清空"""
    bind = bind or engine
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)


__all__ = ["engine", "get_db", "Base", "SessionLocal", "init_db", "reset_db"]
