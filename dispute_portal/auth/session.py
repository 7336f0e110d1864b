"""Client-side persistence of the logged-in identity."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from dispute_portal.core.models import Identity

logger = logging.getLogger(__name__)


class SessionStore:
    """Stores one identity as JSON; a corrupt file is discarded on load."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Optional[Identity]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            identity = Identity.from_dict(data) if isinstance(data, dict) else None
        except (OSError, ValueError) as exc:
            logger.error("Error parsing stored session %s: %s", self.path, exc)
            identity = None
        if identity is None:
            self.clear()
        return identity

    def save(self, identity: Identity) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(identity.to_dict()), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
