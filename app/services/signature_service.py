import hashlib
import hmac
import json
from typing import Any, Dict, Optional

import structlog

from app.models.config import SignatureCheck

logger = structlog.getLogger(__name__)


def serialize_payload(payload: Dict[str, Any]) -> bytes:
    # keys keep the order they were received in
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class SignatureVerifier:
    """
    Checks that an OxaPay callback was signed with the shared callback secret.

    Without a secret the verifier runs in ``SignatureCheck.DISABLED`` mode and accepts
    every payload. This is meant for local development only.
    """

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    @property
    def mode(self) -> SignatureCheck:
        return SignatureCheck.ENFORCED if self._secret else SignatureCheck.DISABLED

    def sign(self, payload: Dict[str, Any]) -> str:
        if not self._secret:
            raise RuntimeError("Callback secret not configured")
        return hmac.new(self._secret.encode(), serialize_payload(payload), hashlib.sha256).hexdigest()

    def verify(self, payload: Dict[str, Any], signature: Optional[str]) -> bool:
        if self.mode == SignatureCheck.DISABLED:
            return True
        if not signature:
            logger.warning("Missing webhook signature")
            return False
        expected = self.sign(payload)
        if not hmac.compare_digest(signature.encode(), expected.encode()):
            logger.error("Invalid signature", signature=signature)
            return False
        return True
