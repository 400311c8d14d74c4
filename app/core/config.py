from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "GHL Custom Values Integration"
    ENVIRONMENT: str = "development"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # GoHighLevel OAuth / API
    GHL_API_DOMAIN: str = "https://services.leadconnectorhq.com"
    GHL_MARKETPLACE_URL: str = "https://marketplace.gohighlevel.com/oauth/chooselocation"
    GHL_APP_CLIENT_ID: str = ""
    GHL_APP_CLIENT_SECRET: str = ""
    GHL_REDIRECT_URI: str = "http://localhost:3000/authorize-handler"
    GHL_SCOPES: str = "locations/customValues.readonly locations/customValues.write"
    GHL_API_VERSION: str = "2021-07-28"
    # Status codes the custom values API answers with when the name already exists
    GHL_CONFLICT_STATUS_CODES: List[int] = [422]

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "ghl-integration"
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

settings = Settings()
