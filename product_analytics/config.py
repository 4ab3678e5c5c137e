#!/usr/bin/env python3
"""
Configuration module for the Product Analytics Dashboard
Reads from environment variables with fallbacks to .env file
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).resolve().parent.parent
env_file = project_root / '.env'
load_dotenv(env_file)

# Also try to load from package directory as fallback
env_path = Path(__file__).parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

class Config:
    """Configuration class that reads from environment variables"""

    # Authentication
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'change-this-password')
    TEAM_USERNAME = os.getenv('TEAM_USERNAME', 'team')
    TEAM_PASSWORD = os.getenv('TEAM_PASSWORD', 'change-this-password')
    SESSION_TTL_SECONDS = int(os.getenv('SESSION_TTL_SECONDS', '3600'))

    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.getenv('FLASK_ENV', 'development')
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'

    # Server Configuration
    HOST = os.getenv('HOST', '0.0.0.0' if FLASK_ENV == 'production' else 'localhost')
    PORT = int(os.getenv('PORT', '5001'))

    # Database Configuration
    ANALYTICS_DB_PATH = os.getenv('ANALYTICS_DB_PATH', '')

    # Timezone Configuration
    DEFAULT_TIMEZONE = os.getenv('DEFAULT_TIMEZONE', 'America/Sao_Paulo')
    DISPLAY_TIMEZONE = os.getenv('DISPLAY_TIMEZONE', DEFAULT_TIMEZONE)

    # Cache / refresh Configuration (5 minutes matches the dashboard cache)
    CACHE_TTL_SECONDS = int(os.getenv('CACHE_TTL_SECONDS', '300'))
    REFRESH_INTERVAL_SECONDS = int(os.getenv('REFRESH_INTERVAL_SECONDS', '300'))

    # Display / Export Configuration
    CURRENCY_SYMBOL = os.getenv('CURRENCY_SYMBOL', 'R$')
    CSV_DECIMAL_SEPARATOR = os.getenv('CSV_DECIMAL_SEPARATOR', ',')
    CSV_FIELD_SEPARATOR = os.getenv('CSV_FIELD_SEPARATOR', ';')

    # Allowed Origins for CORS
    ALLOWED_ORIGINS = os.getenv('ALLOWED_ORIGINS', 'http://localhost:3000,http://localhost:5001').split(',')

# Create singleton instance
config = Config()
