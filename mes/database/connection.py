"""数据库连接模块

统一管理数据库引擎、会话和模型基类的创建
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from ..config.settings import settings

# SQLite 需要允许跨线程使用连接（FastAPI 同步路由运行在线程池中）
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# 创建数据库引擎
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.ECHO_SQL,  # 从配置中读取是否显示SQL日志
    connect_args=connect_args,
)

# 创建会话工厂
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 创建模型基类
Base = declarative_base()


def get_db():
    """获取数据库会话的依赖函数"""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
