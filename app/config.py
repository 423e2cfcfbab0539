from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_TITLE: str = "Course Schedule Exporter"

    # --- 匯出設定 ---
    EXPORT_FILENAME: str = "course_schedule.xlsx"
    FONT_NAME: str = "等线"
    HEADER_FONT_SIZE: int = 12
    BODY_FONT_SIZE: int = 11

    # --- CORS ---
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # 設定檔配置
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()
