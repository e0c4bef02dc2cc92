from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(Enum):
    EXTREME = 'Extreme'
    SEVERE = 'Severe'
    MODERATE = 'Moderate'
    MINOR = 'Minor'
    UNKNOWN = 'Unknown'

    @classmethod
    def parse(cls, value):
        """Case-insensitive lookup; anything unrecognised is UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        wanted = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class AlertRecord:
    # Synthesized as "<start>-<index>": stable only while the provider keeps its ordering.
    id: str
    event: str
    description: str
    severity: Severity
    start: Optional[int]
    end: Optional[int]
    sender_name: str
    tags: tuple = field(default_factory=tuple)

    @property
    def headline(self):
        return self.event

    def to_dict(self):
        return {
            'id': self.id,
            'event': self.event,
            'headline': self.headline,
            'description': self.description,
            'severity': self.severity.value,
            'start': self.start,
            'end': self.end,
            'sender_name': self.sender_name,
            'tags': list(self.tags),
        }
