"""
FLOWT Configuration Settings

This module contains all configuration settings for the FLOWT freight assistant.
Settings can be overridden by environment variables (or a local .env file).
"""

import os
import logging

from dotenv import load_dotenv

load_dotenv()

# API Keys
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

# Supabase Configuration
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

# Model Configuration
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-5-2025-08-07")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1500"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# Conversation & Retrieval Limits
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))
CONTEXT_LISTING_LIMIT = int(os.getenv("CONTEXT_LISTING_LIMIT", "10"))
CONTEXT_BOOKING_LIMIT = int(os.getenv("CONTEXT_BOOKING_LIMIT", "5"))

# Roles allowed to override model settings per request
DEVELOPER_ROLE = "developer"

# HTTP Service
PORT = int(os.getenv("PORT", "8000"))
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = None):
    """Configure root logging for service entry points."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
