"""Topology and launch progress models."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class Topology(str, Enum):
    """Supported deployment shapes."""
    STANDALONE = "standalone"
    REPLICASET = "replicaset"


class LaunchState(str, Enum):
    """Steps of a topology launch, in order."""
    NOT_STARTED = "not_started"
    IMAGE_RESOLVED = "image_resolved"
    CONTAINERS_RUNNING = "containers_running"
    NETWORKED = "networked"
    INITIATED = "initiated"


class LaunchProgress(BaseModel):
    """Tracks how far a launch got."""
    topology: Topology
    version: str
    expected_members: int = Field(default=1, ge=1)
    state: LaunchState = Field(default=LaunchState.NOT_STARTED)
    image: Optional[str] = None
    network: Optional[str] = None
    members: List[str] = Field(default_factory=list)
    networked: List[str] = Field(default_factory=list)

    def advance(self, state: LaunchState) -> None:
        self.state = state

    def add_member(self, name: str) -> None:
        self.members.append(name)

    def connect_member(self, name: str) -> None:
        self.networked.append(name)

    def describe(self) -> str:
        """Human-readable summary of the progress made so far."""
        summary = (
            f"{self.state.value} after starting {len(self.members)} "
            f"of {self.expected_members} members"
        )
        if self.network:
            summary += f", {len(self.networked)} on network {self.network}"
        return summary
