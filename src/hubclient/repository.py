"""Repository-scoped accessors."""

from dataclasses import dataclass

from .executor import RequestExecutor
from .labels import Labels

__all__ = ["Repository"]


@dataclass(frozen=True)
class Repository:
    """Handle for one owner/repo pair."""

    github: RequestExecutor
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def labels(self) -> Labels:
        return Labels(self.github, self.owner, self.repo)
