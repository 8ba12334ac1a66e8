"""
Configuration settings for the ChainLab API

Loads environment variables and provides application configuration.
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings"""

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = "ChainLab Diagram API"
    API_DESCRIPTION: str = "Numeric helpers and step-through tables for blockchain course diagrams"

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173"
    ).split(",")

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Fixture tables (None = bundled chainlab/data/fixtures)
    FIXTURE_DIR: Optional[str] = os.getenv("FIXTURE_DIR") or None

    # Request Limits
    MAX_EXPONENT_BITS: int = int(os.getenv("MAX_EXPONENT_BITS", 4096))
    MAX_MODULUS_BITS: int = 4096
    MAX_TOY_PRIME: int = 10_007

    def exponent_too_large(self, exponent: int) -> bool:
        """Reject exponents that would make the demo endpoints slow"""
        return exponent.bit_length() > self.MAX_EXPONENT_BITS


# Create global settings instance
settings = Settings()


# Validate critical settings on import
if settings.FIXTURE_DIR and not os.path.isdir(settings.FIXTURE_DIR):
    print(f"⚠️  WARNING: FIXTURE_DIR does not exist: {settings.FIXTURE_DIR}")
    print("   Fixture endpoints will fail until it is fixed.")
    print("   Unset FIXTURE_DIR to use the bundled tables")
