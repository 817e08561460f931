"""
Data models for the Memory module.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        timestamp = value
    else:
        timestamp = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


@dataclass
class MemoryRecord:
    """A stored memory."""
    content: str
    context: str = "general"
    type: str = "episodic"
    emotional_weight: float = 0.0
    confidence: float = 1.0
    timestamp: datetime = field(default_factory=utcnow)
    tags: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.timestamp = parse_timestamp(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryRecord":
        return cls(
            content=data["content"],
            context=data.get("context") or "general",
            type=data.get("type") or "episodic",
            emotional_weight=float(data.get("emotional_weight", 0.0)),
            confidence=float(data.get("confidence", 1.0)),
            timestamp=parse_timestamp(data["timestamp"]) if data.get("timestamp") else utcnow(),
            tags=data.get("tags"),
            id=data.get("id"),
        )
