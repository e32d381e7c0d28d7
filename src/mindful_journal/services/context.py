from __future__ import annotations

from dataclasses import dataclass, field

from ..assistant import AssistantGateway
from ..config import AppSettings, get_settings
from ..orchestrator import JournalOrchestrator
from .storage import JournalStorage, build_storage
from .writer import BackgroundWriter


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root wiring settings, the storage backend, the assistant and the orchestrator."""

    settings: AppSettings = field(default_factory=get_settings)
    storage: JournalStorage = field(init=False)
    gateway: AssistantGateway = field(init=False)
    orchestrator: JournalOrchestrator = field(init=False)

    def __post_init__(self) -> None:
        self.storage = build_storage(self.settings)
        self.gateway = AssistantGateway(self.settings)
        self.orchestrator = JournalOrchestrator(
            storage=self.storage,
            gateway=self.gateway,
            writer=BackgroundWriter(),
        )
        self.orchestrator.load()

    def close(self) -> None:
        self.orchestrator.close()
