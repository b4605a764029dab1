"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading. OAuth client credentials live here rather than
in code.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_NAME = "Asset MCP Bridge"
VERSION = "0.1.0"

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class UpstreamMcpConfig(BaseModel):
    """Remote tool server reached over SSE + POST."""

    sse_url: str = Field(
        default="https://asset-management.mcp.cloudinary.com/sse",
        alias="MCP_SSE_URL",
        description="SSE endpoint that announces the per-session message endpoint",
    )
    list_timeout: float = Field(
        default=10.0, alias="MCP_LIST_TIMEOUT", description="Seconds to wait for a tools/list reply"
    )
    call_timeout: float = Field(
        default=30.0, alias="MCP_CALL_TIMEOUT", description="Seconds to wait for a tools/call reply"
    )
    protocol_version: str = Field(
        default="2024-11-05", alias="MCP_PROTOCOL_VERSION", description="Protocol version sent in initialize"
    )
    client_name: str = Field(
        default="asset-mcp-bridge", alias="MCP_CLIENT_NAME", description="clientInfo.name sent in initialize"
    )
    client_version: str = Field(
        default="0.1.0", alias="MCP_CLIENT_VERSION", description="clientInfo.version sent in initialize"
    )

    model_config = {"populate_by_name": True}


class OAuthConfig(BaseModel):
    """OAuth authorization-code exchange against the provider's token endpoint."""

    token_url: str = Field(
        default="https://asset-management.mcp.cloudinary.com/token",
        alias="OAUTH_TOKEN_URL",
        description="Token endpoint URL",
    )
    client_id: str = Field(default="", alias="OAUTH_CLIENT_ID", description="Registered OAuth client id")
    client_secret: Optional[str] = Field(
        default=None, alias="OAUTH_CLIENT_SECRET", description="OAuth client secret (confidential clients)"
    )
    code_verifier: Optional[str] = Field(
        default=None, alias="OAUTH_CODE_VERIFIER", description="PKCE code verifier matching the authorize request"
    )
    redirect_uri: str = Field(
        default="http://localhost:3000/callback",
        alias="OAUTH_REDIRECT_URI",
        description="Redirect URI registered for this client",
    )
    timeout: float = Field(default=15.0, alias="OAUTH_TIMEOUT", description="Token request timeout in seconds")

    model_config = {"populate_by_name": True}


class FolderCleanupConfig(BaseModel):
    """Folder cleanup workflow tuning."""

    max_results: int = Field(
        default=500, alias="CLEANUP_MAX_RESULTS", description="Result cap passed to search-folders"
    )
    delete_pause_seconds: float = Field(
        default=0.2, alias="CLEANUP_DELETE_PAUSE_SECONDS", description="Pause between two deletions"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="ASSET_MCP_BRIDGE_SERVER_HOST",
    )
    server_port: int = Field(
        default=3000,
        description="Server port number",
        alias="ASSET_MCP_BRIDGE_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="ASSET_MCP_BRIDGE_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="simple, detailed or json", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(default=False, description="Also log to a file", alias="ENABLE_FILE_LOGGING")
    static_dir: str = Field(
        default="public",
        description="Directory served at / when it exists",
        alias="STATIC_DIR",
    )

    # =====================================================================
    # Upstream MCP Configuration
    # =====================================================================
    mcp_sse_url: str = Field(default="https://asset-management.mcp.cloudinary.com/sse", alias="MCP_SSE_URL")
    mcp_list_timeout: float = Field(default=10.0, alias="MCP_LIST_TIMEOUT")
    mcp_call_timeout: float = Field(default=30.0, alias="MCP_CALL_TIMEOUT")
    mcp_protocol_version: str = Field(default="2024-11-05", alias="MCP_PROTOCOL_VERSION")
    mcp_client_name: str = Field(default="asset-mcp-bridge", alias="MCP_CLIENT_NAME")
    mcp_client_version: str = Field(default="0.1.0", alias="MCP_CLIENT_VERSION")

    # =====================================================================
    # OAuth Configuration
    # =====================================================================
    oauth_token_url: str = Field(default="https://asset-management.mcp.cloudinary.com/token", alias="OAUTH_TOKEN_URL")
    oauth_client_id: str = Field(default="", alias="OAUTH_CLIENT_ID")
    oauth_client_secret: Optional[str] = Field(default=None, alias="OAUTH_CLIENT_SECRET")
    oauth_code_verifier: Optional[str] = Field(default=None, alias="OAUTH_CODE_VERIFIER")
    oauth_redirect_uri: str = Field(default="http://localhost:3000/callback", alias="OAUTH_REDIRECT_URI")
    oauth_timeout: float = Field(default=15.0, alias="OAUTH_TIMEOUT")

    # =====================================================================
    # Folder Cleanup Configuration
    # =====================================================================
    cleanup_max_results: int = Field(default=500, alias="CLEANUP_MAX_RESULTS")
    cleanup_delete_pause_seconds: float = Field(default=0.2, alias="CLEANUP_DELETE_PAUSE_SECONDS")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def upstream(self) -> UpstreamMcpConfig:
        """Get upstream MCP configuration from environment variables."""
        return UpstreamMcpConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def oauth(self) -> OAuthConfig:
        """Get OAuth configuration from environment variables."""
        return OAuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cleanup(self) -> FolderCleanupConfig:
        """Get folder cleanup configuration from environment variables."""
        return FolderCleanupConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
