"""应用配置模块

使用 Pydantic Settings 管理应用配置，支持从 .env 文件加载环境变量
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # 应用配置
    APP_TITLE: str = "MES 기준정보/생산관리"
    APP_DESCRIPTION: str = "라우팅, BOM, 생산계획, 작업지시 API"
    APP_VERSION: str = "1.0.0"

    # 数据库配置 - 未设置时使用本地 SQLite
    DATABASE_URL: str = "sqlite:///./mes_dev.db"
    ECHO_SQL: bool = False  # 是否打印SQL日志

    # 日志级别
    LOG_LEVEL: str = "INFO"

    # 客户端生成的临时ID（毫秒时间戳）一定大于该阈值
    TEMPORARY_ID_THRESHOLD: int = 1_000_000_000

    DEFAULT_UNIT: str = "EA"

    # 为 True 时，没有作业指示的 "취소" 计划不会被自动恢复为 "계획"
    KEEP_CANCELLED_PLANS: bool = False


# 创建全局配置实例
settings = Settings()
