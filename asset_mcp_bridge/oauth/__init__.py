from .client import OAuthTokenClient
from .errors import (
    MissingAccessTokenError,
    OAuthExchangeError,
    OAuthTransportError,
    UpstreamHTTPError,
    UpstreamHtmlError,
    UpstreamResponseError,
)
from .models import TokenResponse

__all__ = [
    "OAuthTokenClient",
    "TokenResponse",
    "OAuthExchangeError",
    "UpstreamHTTPError",
    "UpstreamHtmlError",
    "UpstreamResponseError",
    "MissingAccessTokenError",
    "OAuthTransportError",
]
