from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SECRET_KEY: str = "change-me-staff-portal-dev-secret-key"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- PERMISSIONS FEED (external auth/authorization service) ---
    PERMISSIONS_API_URL: str = "http://localhost:8001/api/permissions/user"
    PERMISSIONS_FETCH_TIMEOUT: float = 10.0

    ENV: str = "dev"  # "dev" or "prod"
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: str = "http://localhost:5173" # Portal front-end (CORS)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
