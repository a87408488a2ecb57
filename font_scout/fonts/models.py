"""
Data models for fonts seen on a page.

The records cross the boundary to the browser collaborator as JSON, so they
accept the camelCase keys it produces (``elementCount``, ``fontFamily``) as
well as the snake_case field names, and dump back to camelCase.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "EmbeddingPermissions",
    "FontMetadata",
    "FontFaceDeclaration",
    "DownloadedFontFile",
    "ActiveFont",
]


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class EmbeddingPermissions(_Record):
    """Embedding rights decoded from ``OS/2.fsType``."""

    installable: bool
    editable: bool
    preview_and_print: bool
    restricted_license: bool


class FontMetadata(_Record):
    """Provenance and licensing data read from a font binary. Missing fields are None."""

    font_name: Optional[str] = None
    font_family: Optional[str] = None
    foundry: Optional[str] = None
    copyright: Optional[str] = None
    version: Optional[str] = None
    license_info: Optional[str] = None
    unique_identifier: Optional[str] = None
    creation_date: Optional[str] = None
    designer: Optional[str] = None
    embedding_permissions: Optional[EmbeddingPermissions] = None


class FontFaceDeclaration(_Record):
    """One ``@font-face`` rule: family plus the raw ``src`` value."""

    family: str
    source: str = Field("", validation_alias=AliasChoices("source", "src"))
    weight: Optional[str] = None
    style: Optional[str] = None


class DownloadedFontFile(_Record):
    """A font binary the page downloaded."""

    url: str
    name: str = ""
    format: str = "unknown"
    size: int = 0
    source: str = "self-hosted"
    metadata: Optional[FontMetadata] = None


class ActiveFont(_Record):
    """A font family the browser computed for rendered elements."""

    family: str
    element_count: int = 0
    preview: Optional[str] = None
