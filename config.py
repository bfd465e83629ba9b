# Configuration settings for the portfolio API
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class AppConfig:
    """Application configuration settings"""

    ENVIRONMENT = os.getenv("ENVIRONMENT", "Development")

    # MongoDB Configuration
    DATABASE_URL = os.getenv("DATABASE_URL")
    DATABASE_NAME = os.getenv("DATABASE_NAME", "portfolio")

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
    UPLOAD_MAX_BYTES = int(os.getenv("UPLOAD_MAX_BYTES", str(5 * 1024 * 1024)))
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "projects")

    # Admin access
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
    ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")
    JWT_SECRET = os.getenv("JWT_SECRET", "super-secret-key-change")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 12)))
    ADMIN_COOKIE_NAME = os.getenv("ADMIN_COOKIE_NAME", "auth")
    COOKIE_SECURE = _flag("COOKIE_SECURE", "false")
    ADMIN_GATE_ENABLED = _flag("ADMIN_GATE_ENABLED", "true")
    REQUIRE_ADMIN_FOR_WRITES = _flag("REQUIRE_ADMIN_FOR_WRITES", "false")
    LOGIN_PATH = os.getenv("LOGIN_PATH", "/login")

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Logging Configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    PORT = int(os.getenv("PORT", "8000"))

    @classmethod
    def is_cloudinary_configured(cls) -> bool:
        return bool(cls.CLOUDINARY_CLOUD_NAME and cls.CLOUDINARY_API_KEY and cls.CLOUDINARY_API_SECRET)

    @classmethod
    def get_connection_info(cls) -> dict:
        """Get connection information for debugging"""
        return {
            "environment": cls.ENVIRONMENT,
            "has_database_url": bool(cls.DATABASE_URL),
            "database_name": cls.DATABASE_NAME,
            "cloudinary_configured": cls.is_cloudinary_configured(),
            "admin_gate_enabled": cls.ADMIN_GATE_ENABLED,
            "log_level": cls.LOG_LEVEL,
        }


# Global config instance
config = AppConfig()
