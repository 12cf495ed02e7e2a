"""
Slack Request Verification

Verifies X-Slack-Signature / X-Slack-Request-Timestamp headers with the
signing secret (5 minute replay window).
"""

import logging
from typing import Mapping, Optional

from slack_sdk.signature import SignatureVerifier

from decision_bot.config import get_settings

logger = logging.getLogger(__name__)


class SlackRequestVerifier:
    """Wraps slack_sdk's SignatureVerifier; rejects everything without a secret."""

    def __init__(self, signing_secret: Optional[str] = None):
        secret = signing_secret if signing_secret is not None else get_settings().slack_signing_secret
        self._verifier = SignatureVerifier(secret) if secret else None

    def verify(self, body: bytes, headers: Mapping[str, str]) -> bool:
        if self._verifier is None:
            logger.warning("SLACK_SIGNING_SECRET not configured, rejecting request")
            return False
        return self._verifier.is_valid_request(body, dict(headers))
