"""Repository labels interface.

https://docs.github.com/en/rest/issues/labels
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from .executor import RequestExecutor

logger = logging.getLogger("hubclient.labels")

__all__ = ["Label", "LabelOptions", "Labels"]


class LabelOptions(BaseModel):
    """Request body for creating or updating a label.

    description is omitted from the body when unset.
    """

    name: str = Field(min_length=1)
    color: str = Field(pattern=r"^[0-9a-fA-F]{6}$")
    description: str | None = None

    @classmethod
    def new(cls, name: str, color: str, description: str | None = None) -> "LabelOptions":
        return cls(name=name, color=color.lstrip("#"), description=description)


class Label(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str
    name: str
    color: str
    description: str | None = None
    default: bool = False


@dataclass(frozen=True)
class Labels:
    """Label operations scoped to one repository.

    Attributes:
        github: Request executor the operations run on
        owner: Repository owner login
        repo: Repository name
    """

    github: RequestExecutor
    owner: str
    repo: str

    def path(self, more: str = "") -> str:
        return f"/repos/{self.owner}/{self.repo}/labels{more}"

    def _label_path(self, name: str) -> str:
        return self.path("/" + quote(name, safe=""))

    async def create(self, lab: LabelOptions) -> Label:
        """Create a label on the repository."""
        return await self.github.post(self.path(), lab, Label)

    async def update(self, prevname: str, lab: LabelOptions) -> Label:
        """Update the label currently named prevname.

        The path addresses the existing name; lab carries the new attributes,
        so this also renames the label when lab.name differs.
        """
        if prevname != lab.name:
            logger.debug("Renaming label %r to %r in %s/%s", prevname, lab.name, self.owner, self.repo)
        return await self.github.patch(self._label_path(prevname), lab, Label)

    async def delete(self, name: str) -> None:
        await self.github.delete(self._label_path(name))

    async def list(self) -> list[Label]:
        """List the repository's labels (first page, as returned by the API)."""
        return await self.github.get(self.path(), list[Label])
