# uischema/core/config.py
from dotenv import load_dotenv
load_dotenv(".env")
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal

class Settings(BaseSettings):
    # model_config 会自动加载 .env 文件
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    APP_ENV: str = "production"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # --- Schema Engine ---
    # 在门面层对输入的 schema 做结构校验 (悬空指针 / 指针合流 / 环)
    SCHEMA_VALIDATE_ON_LOAD: bool = True

    # --- Model Merge ---
    COMPOSE_SEPARATOR: str = Field(" ", description="composeFromFields 拼接字段值时使用的分隔符")
    DATE_SENTINEL: str = Field("today", description="日期字段中代表“当前日期”的占位值")
    DATE_FORMAT: str = Field("%Y-%m-%d", description="计算出的日期值的格式")

settings = Settings()
