"""Data models for the compile pipeline: page data, render context, and results"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CleanUrlsMode(str, Enum):
    """How internal links are written out by the renderer."""
    disabled = "disabled"
    without_subfolders = "without-subfolders"
    with_subfolders = "with-subfolders"


class IncludeOutcome(Enum):
    """Result of expanding a single include directive."""
    EXPANDED = "expanded"
    NOT_FOUND = "not_found"


class Header(BaseModel):
    """A heading reported by the renderer for in-page navigation."""
    model_config = ConfigDict(frozen=True)

    level:    int
    title:    str
    slug:     str
    link:     str
    children: list["Header"] = Field(default_factory=list)


class PageData(BaseModel):
    """Metadata serialized verbatim into the generated unit as ``__pageData``."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title:          str
    title_template: Optional[Any] = Field(default=None, alias="titleTemplate")
    description:    str = ""
    frontmatter:    dict[str, Any] = Field(default_factory=dict)
    headers:        list[Header] = Field(default_factory=list)
    relative_path:  str = Field(alias="relativePath")
    last_updated:   Optional[int] = Field(default=None, alias="lastUpdated")   # epoch ms

    def to_json(self) -> str:
        """Compact camelCase JSON; unset optional fields are omitted."""
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("titleTemplate", "lastUpdated"):
            if data.get(key) is None:
                data.pop(key, None)
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


class CompileResult(BaseModel):
    """Output of one compile call; cached and returned unchanged on a hit."""
    model_config = ConfigDict(frozen=True)

    unit_source: str
    page_data:   PageData
    dead_links:  list[str] = Field(default_factory=list)
    includes:    list[str] = Field(default_factory=list)


@dataclass
class SideChannelData:
    """Extra render outputs beyond the HTML body; filled during one render call."""
    links:        list[str] = field(default_factory=list)
    headers:      list[Header] = field(default_factory=list)
    hoisted_tags: list[str] = field(default_factory=list)


@dataclass
class RenderEnv:
    """Per-call render context; the renderer attaches content, frontmatter and data."""
    path:          str
    relative_path: str
    clean_urls:    CleanUrlsMode = CleanUrlsMode.disabled
    content:       str = ""
    frontmatter:   dict[str, Any] = field(default_factory=dict)
    data:          SideChannelData = field(default_factory=SideChannelData)
