"""
Econ Dashboard — Network Mode
──────────────────────────────
Degraded ("corporate network") mode is an explicit flag: set from the
DEGRADED_MODE env var at startup and flipped by an operator through the API.
It is never inferred by probing third-party hosts.

While degraded:
  - new cache entries live for DEGRADED_TTL instead of the normal TTL
  - failed Yahoo symbols with reference data are served from the fallback table
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Optional

log = logging.getLogger("ed.network")


@dataclass
class NetworkMode:
    degraded:   bool = False
    source:     str  = "config"          # "config" | "operator"
    changed_at: Optional[str] = None

    def set_degraded(self, degraded: bool, source: str = "operator") -> None:
        if degraded != self.degraded:
            log.warning(f"Network mode → {'degraded' if degraded else 'standard'} (by {source})")
        self.degraded   = degraded
        self.source     = source
        self.changed_at = datetime.now(timezone.utc).isoformat()

    def should_use_fallback(self, service: str) -> bool:
        # Only Yahoo has reference data; FRED failures are always reported as-is.
        return self.degraded and service == "yahoo"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["mode"] = "degraded" if self.degraded else "standard"
        return d
