"""
Configuration settings for the match predictor.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    api_title: str = "Tennis Match Predictor API"
    api_version: str = "1.0.0"
    api_description: str = "Win probability and decimal odds from surface Elo ratings"

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True

    # CORS Configuration
    allowed_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    allowed_methods: List[str] = ["GET", "POST", "PUT"]
    allowed_headers: List[str] = ["*"]

    # Ratings source (URL wins over the local CSV when set)
    ratings_csv_path: str = "data/player_elo_ratings.csv"
    ratings_url: Optional[str] = None
    ratings_timeout: int = 30  # seconds

    # Rating categories in CSV column order, after the name column
    rating_categories: List[str] = ["overall", "hard", "clay", "grass"]

    # Player search
    search_limit: int = 10

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"  # log file records
    log_file: str = "logs/match_predictor.log"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
