"""Message identifiers and tablet deployment records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(order=True)
class MessageId:
    """Position of a message in an epoch-fenced stream."""

    epoch: int = 0
    sequence: int = 0

    @classmethod
    def fenced(cls, epoch: int) -> MessageId:
        """The fence message that opens ``epoch``."""
        return cls(epoch, 0)

    def advance(self, next: MessageId) -> bool:
        """Move to ``next`` if it directly follows this id.

        Returns ``False`` for stale ids, ``True`` after moving forward, and
        raises ``ValueError`` when ``next`` skips sequences within the epoch.
        """
        if next.epoch < self.epoch:
            return False
        if next.epoch == self.epoch:
            if next.sequence <= self.sequence:
                return False
            if next.sequence != self.sequence + 1:
                raise ValueError(
                    "can not advance epoch sequence from "
                    f"{self.epoch}:{self.sequence} to {next.epoch}:{next.sequence}"
                )
        self.epoch = next.epoch
        self.sequence = next.sequence
        return True


@dataclass
class TabletDeployment:
    """Servers a tablet is deployed to, versioned by epoch and generation."""

    epoch: int = 0
    generation: int = 0
    servers: list[str] = field(default_factory=list)

    def update(self, epoch: int, generation: int, servers: list[str]) -> bool:
        """Replace the deployment if the given version is newer; return whether it was."""
        if (self.epoch, self.generation) < (epoch, generation):
            self.epoch = epoch
            self.generation = generation
            self.servers = list(servers)
            return True
        return False

    def index(self, node: str) -> int | None:
        """Position of ``node`` among the servers, or ``None``."""
        try:
            return self.servers.index(node)
        except ValueError:
            return None

    def order(self, other: TabletDeployment) -> int:
        """Compare versions: -1 if older than ``other``, 1 if newer, 0 if the same."""
        mine, theirs = self.version(), other.version()
        return (mine > theirs) - (mine < theirs)

    def version(self) -> tuple[int, int]:
        """The ``(epoch, generation)`` pair."""
        return (self.epoch, self.generation)