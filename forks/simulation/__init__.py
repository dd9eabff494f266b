"""Life simulation — scenarios, stages, and event history."""

from .models import STAGES, Choice, EventRecord, LifeStage, Scenario, StageBand

__all__ = ["STAGES", "Choice", "EventRecord", "LifeStage", "Scenario", "StageBand"]
