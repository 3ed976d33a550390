"""Derived views produced by the engine. None of these are persisted."""
import enum
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class TrajectoryVerdict(str, enum.Enum):
    on_track = "on_track"
    at_risk = "at_risk"
    failing = "failing"
    uncertain = "uncertain"


class PIPStage(str, enum.Enum):
    pre_30 = "pre_30"
    window_30 = "window_30"
    window_60 = "window_60"
    window_90 = "window_90"
    post_90 = "post_90"


class AlertSeverity(str, enum.Enum):
    critical = "critical"
    warning = "warning"
    info = "info"


class RecommendationPriority(str, enum.Enum):
    urgent = "urgent"
    high = "high"
    medium = "medium"


SEVERITY_ORDER = {AlertSeverity.critical: 0, AlertSeverity.warning: 1, AlertSeverity.info: 2}
PRIORITY_ORDER = {RecommendationPriority.urgent: 0, RecommendationPriority.high: 1, RecommendationPriority.medium: 2}


class Alert(BaseModel):
    id: str
    severity: AlertSeverity
    title: str
    description: str
    recommendation: str


class Recommendation(BaseModel):
    id: str
    priority: RecommendationPriority
    action: str
    why: str


class ExpectationSummary(BaseModel):
    met: int = 0
    partially_met: int = 0
    not_met: int = 0
    in_progress: int = 0
    pending: int = 0
    total: int = 0
    # Whole percent, 0..100
    completion_rate: int = 0


class CadenceAudit(BaseModel):
    expected: int
    actual: int
    # 999 when there are no check-ins; see NO_CHECK_IN_SENTINEL
    days_since_last: int
    is_behind_cadence: bool
    compliance_percent: int


class DocumentationGap(BaseModel):
    id: str
    severity: AlertSeverity
    category: str
    description: str
    how_to_fix: str
    penalty: int


class DocumentationScore(BaseModel):
    score: int = Field(ge=0, le=100)
    label: str
    gaps: List[DocumentationGap] = Field(default_factory=list)
    critical_count: int = 0
    warning_count: int = 0


class AuditEntry(BaseModel):
    entry_date: date
    type: str
    description: str
    participants: List[str] = Field(default_factory=list)
    documentation: str = ""


class PIPEvaluation(BaseModel):
    pip_id: str
    as_of: date
    days_in_pip: int
    days_remaining: int
    stage: PIPStage
    next_milestone: Optional[str] = None
    next_milestone_date: Optional[date] = None
    trajectory: TrajectoryVerdict
    trajectory_message: str = ""
    expectations: ExpectationSummary
    cadence: CadenceAudit
    alerts: List[Alert] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    critical_alert_count: int = 0
