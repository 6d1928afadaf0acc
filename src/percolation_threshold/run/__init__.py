"""Run definition and orchestration."""

from .config import ExperimentConfig
from .orchestrator import RunOrchestrator

__all__ = ['ExperimentConfig', 'RunOrchestrator']
