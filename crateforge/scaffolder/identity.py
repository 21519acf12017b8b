"""Project identities.

An identity names the workspace directory of one generation request.  It is
derived from the current UTC time and the content hash of the request, and
is only handed out once the matching directory has been created, so two
requests can never share one.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from crateforge.errors import IdentityExhausted, ProjectCreationError
from crateforge.manifest.models import ProjectDescription

logger = logging.getLogger(__name__)

IDENTITY_LENGTH = 16

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class IdentityGenerator:
    """Derives collision-free identities for one :class:`ProjectDescription`.

    Attributes:
        workspace_dir: Directory under which project directories live.
        max_attempts: Candidates tried by :meth:`generate` / :meth:`claim`
            before :class:`IdentityExhausted` is raised.
    """

    def __init__(
        self,
        workspace_dir: str | Path,
        description: ProjectDescription,
        max_attempts: int = 32,
        clock: Clock = _utc_now,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.workspace_dir = Path(workspace_dir)
        self.max_attempts = max_attempts
        self._description_hash = description.content_hash()
        self._clock = clock

    def candidate(self) -> str:
        """Derive one identity from the clock and the description hash."""
        stamp = self._clock().isoformat()
        digest = hashlib.sha256(f"{stamp}{self._description_hash}".encode("utf-8"))
        identity = digest.hexdigest()[:IDENTITY_LENGTH]
        logger.info("Project identity candidate: %s", identity)
        return identity

    def path_for(self, identity: str) -> Path:
        return self.workspace_dir / identity

    def generate(self) -> str:
        """Return the first candidate with no existing workspace directory.

        Nothing is created; the result may still be taken by a concurrent
        request before the caller creates it.  Use :meth:`claim` to reserve.

        Raises:
            IdentityExhausted: If every attempt produced an existing directory.
        """
        for _ in range(self.max_attempts):
            identity = self.candidate()
            if not self.path_for(identity).exists():
                return identity
        raise IdentityExhausted(self.max_attempts)

    def claim(self) -> tuple[str, Path]:
        """Create the directory of a fresh identity and return ``(identity, path)``.

        Directory creation is the source of truth: a candidate whose
        directory appears between the existence check and ``mkdir`` costs one
        attempt and a new candidate is derived.

        Raises:
            IdentityExhausted: If no directory could be created within the
                attempt budget.
            ProjectCreationError: On any other filesystem failure.
        """
        try:
            self.workspace_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ProjectCreationError(self.workspace_dir, exc) from exc

        for attempt in range(1, self.max_attempts + 1):
            identity = self.candidate()
            path = self.path_for(identity)
            if path.exists():
                continue
            try:
                path.mkdir()
            except FileExistsError:
                logger.warning(
                    "Project directory %s appeared before it could be created "
                    "(attempt %d/%d)", path, attempt, self.max_attempts,
                )
                continue
            except OSError as exc:
                raise ProjectCreationError(path, exc) from exc
            return identity, path
        raise IdentityExhausted(self.max_attempts)
