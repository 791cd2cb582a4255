"""
Session Context: analytics over a learner's recent study sessions.

Derived views (topics, weaknesses, strengths) are computed once at
construction and cached for the object's lifetime. A context is built per
request from the caller-supplied history slice and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional, Union

try:
    from ..config import config
except ImportError:
    from src.config import config


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class SessionRecord:
    """
    One historical study session.

    Attributes:
        topic: Topic studied
        percentage: Score percentage (0-100), None if the session was not scored
        timestamp: When the session happened (timezone-aware)
        subject: Subject identifier, if recorded
        level: Academic level, if recorded
    """

    topic: str
    percentage: Optional[float] = None
    timestamp: Optional[datetime] = None
    subject: Optional[str] = None
    level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionRecord:
        """Build from the wire shape {topic, score: {percentage}, timestamp}."""
        score = data.get("score") or {}
        percentage = score.get("percentage") if isinstance(score, dict) else None
        return cls(
            topic=data.get("topic", ""),
            percentage=float(percentage) if percentage is not None else None,
            timestamp=_parse_timestamp(data.get("timestamp")),
            subject=data.get("subject"),
            level=data.get("level"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire dictionary."""
        return {
            "topic": self.topic,
            "score": {"percentage": self.percentage} if self.percentage is not None else None,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "subject": self.subject,
            "level": self.level,
        }


class SessionContext:
    """
    Normalized, read-only view over historical sessions.

    Usage:
        context = SessionContext([
            {"topic": "algebra", "score": {"percentage": 50}, "timestamp": "2024-05-01T10:00:00Z"},
        ])
        context.weaknesses  # ["algebra"]
    """

    def __init__(self, sessions: Optional[Iterable[Union[SessionRecord, dict]]] = None):
        self._sessions: tuple[SessionRecord, ...] = tuple(
            s if isinstance(s, SessionRecord) else SessionRecord.from_dict(s)
            for s in (sessions or ())
        )
        self._topics = self._extract_topics()
        self._weaknesses = self._extract_by_score(
            lambda pct: pct < config.analytics.weakness_threshold
        )
        self._strengths = self._extract_by_score(
            lambda pct: pct >= config.analytics.strength_threshold
        )

    # ==================== Derived Views ====================

    @property
    def sessions(self) -> list[SessionRecord]:
        """Sessions in input order."""
        return list(self._sessions)

    @property
    def topics(self) -> list[str]:
        """Unique topics seen, in first-seen order."""
        return list(self._topics)

    @property
    def weaknesses(self) -> list[str]:
        """Topics with a session scored below the weakness threshold."""
        return list(self._weaknesses)

    @property
    def strengths(self) -> list[str]:
        """Topics with a session scored at or above the strength threshold."""
        return list(self._strengths)

    def _extract_topics(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(s.topic for s in self._sessions if s.topic))

    def _extract_by_score(self, predicate) -> tuple[str, ...]:
        return tuple(
            dict.fromkeys(
                s.topic
                for s in self._sessions
                if s.topic and s.percentage is not None and predicate(s.percentage)
            )
        )

    # ==================== Queries ====================

    def get_recent(self, count: Optional[int] = None) -> list[SessionRecord]:
        """
        Most recent sessions first.

        Ties in timestamp keep input order; sessions without a timestamp
        sort last.

        Args:
            count: Maximum number of sessions (default from config)

        Raises:
            ValueError: If count is negative
        """
        if count is None:
            count = config.analytics.recent_sessions_default
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        ordered = sorted(
            self._sessions,
            key=lambda s: s.timestamp or _EPOCH,
            reverse=True,
        )
        return ordered[:count]

    def find_related_topics(self, topic: str) -> list[str]:
        """
        Known topics sharing a keyword with the given topic.

        The topic is split on whitespace and lowercased; a known topic is
        related when its lowercase text contains any of those tokens.
        """
        keywords = (topic or "").lower().split()
        if not keywords:
            return []
        return [
            known
            for known in self._topics
            if any(keyword in known.lower() for keyword in keywords)
        ]

    def average_score(self) -> Optional[float]:
        """Mean percentage across scored sessions, None if nothing was scored."""
        scores = [s.percentage for s in self._sessions if s.percentage is not None]
        if not scores:
            return None
        return round(sum(scores) / len(scores), 2)

    def __len__(self) -> int:
        return len(self._sessions)

    def __repr__(self) -> str:
        return (
            f"SessionContext(sessions={len(self._sessions)}, "
            f"weaknesses={list(self._weaknesses)}, strengths={list(self._strengths)})"
        )
