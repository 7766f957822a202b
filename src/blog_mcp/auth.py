"""Access control for the blog's read-only MCP API.

Every post tool and resource only reads the library, so a caller either
gets the read scope or nothing. Setting BLOG_AUTH_TOKEN turns a public
blog into one that answers only holders of that API key.
"""

import hmac
import logging

from fastmcp.server.auth import AccessToken, TokenVerifier

from blog_mcp.config import Config

logger = logging.getLogger(__name__)

READ_SCOPES = ["read"]


def _grant(token: str, client_id: str) -> AccessToken:
    return AccessToken(token=token, client_id=client_id, scopes=list(READ_SCOPES))


class BearerTokenVerifier(TokenVerifier):
    """Checks the blog API key sent as ``Authorization: Bearer <key>``.

    A matching key is granted read access to posts and tags. Without a
    configured key, readers are let through anonymously.
    """

    def __init__(self, config: Config):
        super().__init__()
        self._config = config

    async def verify_token(self, token: str) -> AccessToken | None:
        """Return a read grant for ``token``, or None to reject the reader."""
        api_key = self._config.auth_token
        if api_key is None:
            return _grant(token or "anonymous", "anonymous")

        if not token:
            logger.warning("Rejected blog reader: no API key sent")
            return None

        if not hmac.compare_digest(token.encode(), api_key.encode()):
            logger.warning("Rejected blog reader: API key mismatch")
            return None

        return _grant(token, "authenticated")


def get_auth_provider(config: Config) -> BearerTokenVerifier | None:
    """Verifier for a private blog, or None when posts are public."""
    if config.auth_token is None:
        return None
    return BearerTokenVerifier(config)
