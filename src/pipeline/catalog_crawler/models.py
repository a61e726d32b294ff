"""Typed shapes of the Google API Discovery directory listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DirectoryEntry:
    """One API entry of the Discovery directory."""

    id: str
    name: str
    version: str = ""
    title: str = ""
    description: str = ""
    discovery_link: str = ""
    discovery_rest_url: str = ""
    documentation_link: str = ""
    icons: dict[str, str] = field(default_factory=dict)
    kind: str = ""
    labels: tuple[str, ...] = ()
    preferred: bool = False

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DirectoryEntry":
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload.get("name", "")),
            version=str(payload.get("version", "")),
            title=str(payload.get("title", "")),
            description=str(payload.get("description", "")),
            discovery_link=str(payload.get("discoveryLink", "")),
            discovery_rest_url=str(payload.get("discoveryRestUrl", "")),
            documentation_link=str(payload.get("documentationLink", "")),
            icons={
                key: str(value)
                for key, value in (payload.get("icons") or {}).items()
                if key in ("x16", "x32")
            },
            kind=str(payload.get("kind", "")),
            labels=tuple(str(label) for label in payload.get("labels") or ()),
            preferred=bool(payload.get("preferred", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "description": self.description,
            "discoveryLink": self.discovery_link,
            "discoveryRestUrl": self.discovery_rest_url,
            "documentationLink": self.documentation_link,
            "icons": {"x16": self.icons.get("x16", ""), "x32": self.icons.get("x32", "")},
            "id": self.id,
            "kind": self.kind,
            "name": self.name,
            "preferred": self.preferred,
            "title": self.title,
            "version": self.version,
        }
        if self.labels:
            payload["labels"] = list(self.labels)
        return payload


@dataclass(frozen=True)
class DirectoryList:
    """The directory document: format version, kind and its API entries."""

    discovery_version: str = ""
    kind: str = ""
    items: tuple[DirectoryEntry, ...] = ()

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DirectoryList":
        return cls(
            discovery_version=str(payload.get("discoveryVersion", "")),
            kind=str(payload.get("kind", "")),
            items=tuple(
                DirectoryEntry.from_dict(item)
                for item in payload.get("items") or ()
                if isinstance(item, dict)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "discoveryVersion": self.discovery_version,
            "items": [item.to_dict() for item in self.items],
            "kind": self.kind,
        }
