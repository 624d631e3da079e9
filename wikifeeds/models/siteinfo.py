"""Site metadata models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Namespace(BaseModel):
    """A namespace defined by a site."""

    id: int = Field(..., description="Namespace id")
    name: str = Field("", description="Localized namespace name")
    canonical: Optional[str] = Field(None, description="Canonical (English) name")
    case: str = Field("first-letter", description="Title case mode")


class SiteInfo(BaseModel):
    """Subset of MediaWiki siteinfo needed to handle titles."""

    mainpage: str = Field(..., description="Main page title")
    lang: str = Field(..., description="Content language code")
    case: str = Field("first-letter", description="Default title case mode")
    legaltitlechars: Optional[str] = Field(None, description="Regex class of legal characters")
    namespaces: Dict[int, Namespace] = Field(default_factory=dict)
    namespacealiases: Dict[str, int] = Field(
        default_factory=dict, description="Alias name to namespace id"
    )
    variants: List[str] = Field(default_factory=list, description="Language variants")

    @property
    def has_variants(self) -> bool:
        """Whether the site serves language variants."""
        return bool(self.variants)
