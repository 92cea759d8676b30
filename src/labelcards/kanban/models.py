"""Data models for GitHub classic project boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Project:
    """A classic project attached to a repository."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass(frozen=True)
class Column:
    """A column within a project board."""

    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Column:
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass(frozen=True)
class Card:
    """A card in a column.

    Cards backed by an issue carry a ``content_url`` pointing at the issue;
    free-text notes leave it empty and carry ``note`` instead.
    """

    id: int
    content_url: str | None = None
    note: str | None = None

    @property
    def is_issue(self) -> bool:
        return bool(self.content_url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Card:
        return cls(
            id=data["id"],
            content_url=data.get("content_url") or None,
            note=data.get("note"),
        )


@dataclass(frozen=True)
class Label:
    """A label attached to an issue."""

    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Label:
        return cls(name=data["name"])
