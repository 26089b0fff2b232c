"""Pydantic models for compiled documents and directories."""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DATE_FORMAT = "%d %B %Y"


class Frontmatter(BaseModel):
    """Metadata block of a document, or the info record of a directory."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    tags: frozenset[str] | None = None
    date: dt.date

    def formatted_date(self) -> str:
        return self.date.strftime(DATE_FORMAT)


class FileNode(BaseModel):
    """One compiled document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    path: str = Field(description="Source path of the document")
    frontmatter: Frontmatter


class DirectoryNode(BaseModel):
    """One compiled directory, children in traversal order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["directory"] = "directory"
    path: str = Field(description="Source path of the directory")
    info: Frontmatter | None = None
    contents: list[TreeNode] = Field(default_factory=list)

    def walk(self):
        """Yield every node below this one, depth first."""
        for child in self.contents:
            yield child
            if isinstance(child, DirectoryNode):
                yield from child.walk()


TreeNode = Annotated[Union[FileNode, DirectoryNode], Field(discriminator="kind")]

DirectoryNode.model_rebuild()


class PageEntry(BaseModel):
    """Display-only projection of a tree node for index listings."""

    relative_path: str
    frontmatter: Frontmatter | None = None
    formatted_date: str = ""
    is_directory: bool = False


class BuildReport(BaseModel):
    documents: int = 0
    directories: int = 0
    duration: float = 0.0
    tree: DirectoryNode | None = None
