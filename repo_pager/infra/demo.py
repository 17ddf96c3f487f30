"""Fabricated repositories for the offline demo identity."""

from __future__ import annotations

import random
import string

from repo_pager.core.schemas import IssuesConnection, Repository, RepositoryOwner, StarGazers
from repo_pager.infra.auth.credentials import DEMO_AVATAR_URL, DEMO_USER_LOGIN

DEFAULT_DEMO_REPOSITORY_COUNT = 50
MAX_RANDOM_NUMBER = 100


class DemoRepositoryFactory:
    """Build a fixed number of random repositories owned by the demo user.

    Args:
        count: Repositories produced by each ``build()`` call.
        seed: Seed for reproducible output.

    Example:
        ```python
        repos = DemoRepositoryFactory(count=3, seed=1).build()
        ```
    """

    def __init__(self, count: int = DEFAULT_DEMO_REPOSITORY_COUNT, seed: int | None = None) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        self.count = count
        self._random = random.Random(seed)

    def random_text(self, length: int = 8) -> str:
        return "".join(self._random.choices(string.ascii_letters, k=length))

    def random_number(self) -> int:
        return self._random.randint(0, MAX_RANDOM_NUMBER)

    def build(self) -> tuple[Repository, ...]:
        owner = RepositoryOwner(login=DEMO_USER_LOGIN, avatar_url=DEMO_AVATAR_URL)
        return tuple(
            Repository(
                name=f"Repository {self.random_text()}",
                description=self.random_text(24),
                fork_count=self.random_number(),
                owner=owner,
                issues=IssuesConnection(total_count=self.random_number()),
                url=DEMO_AVATAR_URL,
                stargazers=StarGazers(total_count=self.random_number()),
                is_fork=False,
            )
            for _ in range(self.count)
        )
