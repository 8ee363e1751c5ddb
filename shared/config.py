from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file.
# `override=True` ensures that the .env file takes precedence over system environment variables.
load_dotenv(override=True)

class Settings(BaseSettings):
    CONTAINERPORT_MCP_SHOPIFY: int = 8101
    CONTAINERPORT_MCP_GMAIL: int = 8102
    CONTAINERPORT_MCP_DRIVE: int = 8103
    CONTAINERPORT_MCP_DOCS: int = 8104
    CONTAINERPORT_MCP_CALL_FOR_ME: int = 8105

    SHOPIFY_API_VERSION: str = "2025-10"

    # Remote MCP server that places the phone calls, and the service tracking them
    CALL_SERVICE_URL: str = "https://make-a-call-for-me.fly.dev/mcp"
    CONVERSATION_API_URL: str = "http://host.docker.internal:8903/api"

    # External auth portal used by the Gmail server when no token is injected
    AUTH_SERVER_URL: str = "http://localhost:8901"
    GMAIL_AUTH_CONFIG_ID: Optional[str] = None

    model_config = SettingsConfigDict(env_file=(".env", ".env.local"), extra='ignore')

settings = Settings()
