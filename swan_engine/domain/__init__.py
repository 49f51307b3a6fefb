from swan_engine.domain.analysis import Analysis, Hypothesis
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot

__all__ = ["Analysis", "Hypothesis", "RiskNarrative", "RiskSignal", "DataSnapshot"]
