from collections import Counter
from typing import Sequence

from pip_intel.models.insight import TrajectoryVerdict
from pip_intel.models.pip import CheckInStatus, PIPCheckIn

ON_TRACK_RATE = 0.70
AT_RISK_RATE = 0.40

TRAJECTORY_MESSAGES = {
    TrajectoryVerdict.on_track: "Employee is showing improvement and meeting expectations",
    TrajectoryVerdict.at_risk: "Some progress, but concerns remain. Requires close monitoring.",
    TrajectoryVerdict.failing: "Not meeting expectations. Termination likely if no significant improvement.",
    TrajectoryVerdict.uncertain: "Insufficient data to assess trajectory. More check-ins needed.",
}


def classify(completion_rate: float, recent_check_ins: Sequence[PIPCheckIn]) -> TrajectoryVerdict:
    """
    Classify a PIP from its completion rate (a fraction, 0..1) and the
    check-ins of the recent window. Rules apply in order; the first match wins.
    """
    counts = Counter(c.overall_status for c in recent_check_ins)
    on_track = counts[CheckInStatus.on_track]
    at_risk = counts[CheckInStatus.at_risk]
    off_track = counts[CheckInStatus.off_track]

    if completion_rate >= ON_TRACK_RATE and on_track > off_track:
        return TrajectoryVerdict.on_track
    if completion_rate >= AT_RISK_RATE and at_risk > 0:
        return TrajectoryVerdict.at_risk
    if completion_rate < AT_RISK_RATE or off_track > on_track:
        return TrajectoryVerdict.failing
    return TrajectoryVerdict.uncertain
