"""
Auth: HTTP Basic credential header for the rewards API.

Derived once from the merchant key/secret pair and reused for every request.
"""

import base64
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def derive_auth_header(key: Optional[str], secret: Optional[str]) -> str:
    """Build ``Basic base64(key:secret)``. Returns "" when either value is missing."""
    if not key or not secret:
        logger.error("Missing merchant credentials (MERCHANT_KEY / MERCHANT_SECRET); requests will be unauthenticated")
        return ""
    encoded = base64.b64encode(f"{key}:{secret}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"
