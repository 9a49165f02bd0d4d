"""
Configuration management for CodeSync.
Handles environment variables and application settings.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""
    
    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    
    # Stored GitHub settings - fill any field a sync request leaves out
    # These are loaded from environment variables, NEVER hardcoded
    GITHUB_TOKEN: Optional[str] = os.getenv("GITHUB_TOKEN")
    GITHUB_USERNAME: Optional[str] = os.getenv("GITHUB_USERNAME")
    GITHUB_REPO: Optional[str] = os.getenv("GITHUB_REPO")
    
    # Remote store
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_BRANCH: str = os.getenv("GITHUB_BRANCH", "main")
    
    # Execution bridge
    BRIDGE_TIMEOUT_SECONDS: float = float(os.getenv("BRIDGE_TIMEOUT_SECONDS", "1.0"))
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console
    
    # Request settings (page fetches)
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    
    @classmethod
    def is_github_configured(cls) -> bool:
        """
        Check if stored GitHub settings are fully configured.
        
        Requires ALL of:
        - GITHUB_TOKEN
        - GITHUB_USERNAME
        - GITHUB_REPO
        """
        return all([
            cls.GITHUB_TOKEN,
            cls.GITHUB_USERNAME,
            cls.GITHUB_REPO,
        ])
    
    @classmethod
    def get_missing_github_vars(cls) -> List[str]:
        """Return list of missing GitHub environment variables."""
        missing = []
        if not cls.GITHUB_TOKEN:
            missing.append("GITHUB_TOKEN")
        if not cls.GITHUB_USERNAME:
            missing.append("GITHUB_USERNAME")
        if not cls.GITHUB_REPO:
            missing.append("GITHUB_REPO")
        return missing


config = Config()
