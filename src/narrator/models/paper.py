"""Research paper input model."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class Author(BaseModel):
    """Structured author entry."""

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: Optional[str] = None
    affiliation: Optional[str] = None

    class Config:
        """Pydantic config."""
        populate_by_name = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class PaperMetadata(BaseModel):
    """Bibliographic metadata."""

    title: Optional[str] = None
    authors: List[Union[str, Author]] = Field(default_factory=list)
    abstract: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)


class Section(BaseModel):
    """A titled section of body text."""

    title: str
    content: str
    level: int = 1


class Caption(BaseModel):
    """Figure, image or table caption."""

    caption: str = ""
    description: Optional[str] = None
    data: Optional[Any] = None


class PaperData(BaseModel):
    """Extracted research paper, as uploaded by the user."""

    metadata: PaperMetadata = Field(default_factory=PaperMetadata)
    sections: Union[List[Section], Dict[str, Any]] = Field(default_factory=list)
    tables: List[Caption] = Field(default_factory=list)
    figures: List[Caption] = Field(default_factory=list)
    images: List[Caption] = Field(default_factory=list)

    @property
    def title(self) -> str:
        """Paper title, or a stand-in when the metadata lacks one."""
        return self.metadata.title or "Untitled Paper"

    @property
    def author_names(self) -> list[str]:
        names = []
        for author in self.metadata.authors:
            name = author if isinstance(author, str) else author.full_name
            if name:
                names.append(name)
        return names

    @classmethod
    def from_json(cls, path: Path) -> "PaperData":
        """Load paper data from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_prompt_json(self) -> str:
        """Serialize for embedding in a prompt."""
        return self.model_dump_json(indent=2, exclude_none=True, by_alias=True)
