from .history import HistoryPoint, SentimentHistory
from .orchestrator import Orchestrator
from .types import CyclePhase, DashboardState, OrchestratorConfig

__all__ = [
    "CyclePhase",
    "DashboardState",
    "HistoryPoint",
    "Orchestrator",
    "OrchestratorConfig",
    "SentimentHistory",
]
