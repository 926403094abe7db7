"""
Application configuration
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    API_TITLE: str = "Sourcemap Resolver API"
    API_VERSION: str = "0.1.0"
    
    # Resolver profile
    SOURCEMAP_PROFILE_ID: str = "lua-inline-v0"
    SOURCEMAP_MAP_SUFFIX: str = ".map"
    SOURCEMAP_COMMENT_PREFIX: str = "--"
    SOURCEMAP_NATIVE_SENTINEL: str = "[C]"
    
    # Base directory for relative map sources (defaults to the process cwd)
    SOURCEMAP_SOURCE_BASE: str | None = None
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
