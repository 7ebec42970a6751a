from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MenuItem:
    """Canonical menu item; every raw shape is normalized into this."""

    id: str
    name: str
    category: str | None = None
    labels: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "labels": sorted(self.labels),
        }


@dataclass(frozen=True)
class TaggedMenuItem(MenuItem):
    tags: frozenset[str] = field(default_factory=frozenset)
