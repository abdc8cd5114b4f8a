from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Authorizer(Protocol):
    def is_authorized(self, credential: Any) -> bool: ...


@dataclass(frozen=True, slots=True)
class SharedSecretAuthorizer:
    """Exact match against a single shared administrator secret.

    The secret travels and is stored in plaintext. Anything that is not a
    string never matches.
    """

    secret: str

    def is_authorized(self, credential: Any) -> bool:
        if not isinstance(credential, str):
            ok = False
        else:
            ok = hmac.compare_digest(credential.encode("utf-8"), self.secret.encode("utf-8"))
        if not ok:
            logger.warning("Rejected administrator credential")
        return ok
