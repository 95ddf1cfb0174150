from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PushMessage:
    member_id: int
    title: str
    body: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "title": self.title,
            "body": self.body,
            "data": dict(self.data),
        }
