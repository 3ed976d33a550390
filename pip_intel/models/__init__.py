# Models package
# Plain pydantic records; persistence lives outside this service.
from .pip import (
    PerformanceImprovementPlan,
    PIPExpectation,
    PIPCheckIn,
    PIPMilestoneReview,
    PIPPhase,
    PIPStatus,
    ExpectationStatus,
    CheckInStatus,
    CheckInType,
)
from .review import (
    ActionItem,
    DraftPlan,
    PlacementSuggestion,
    PlanType,
    Rating,
    ReviewAnalysis,
)
from .employee import EmployeeRecord, QualityIssue
from .insight import (
    Alert,
    AlertSeverity,
    PIPStage,
    Recommendation,
    RecommendationPriority,
    TrajectoryVerdict,
)

__all__ = [
    "PerformanceImprovementPlan",
    "PIPExpectation",
    "PIPCheckIn",
    "PIPMilestoneReview",
    "PIPPhase",
    "PIPStatus",
    "ExpectationStatus",
    "CheckInStatus",
    "CheckInType",
    "ActionItem",
    "DraftPlan",
    "PlacementSuggestion",
    "PlanType",
    "Rating",
    "ReviewAnalysis",
    "Alert",
    "AlertSeverity",
    "PIPStage",
    "Recommendation",
    "RecommendationPriority",
    "TrajectoryVerdict",
    "EmployeeRecord",
    "QualityIssue",
]
