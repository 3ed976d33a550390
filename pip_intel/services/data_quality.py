"""
Duplicate detection over the employee directory.

Records are grouped by normalized name (case-insensitive, trimmed) and by
normalized email; blank emails are ignored. Each group of two or more
records yields exactly one issue, however many records it holds.
"""
import logging
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Sequence

from pip_intel.models.employee import EmployeeRecord, IssueSeverity, QualityIssue, QualityIssueType

logger = logging.getLogger(__name__)


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _clusters(
    employees: Sequence[EmployeeRecord],
    key: Callable[[EmployeeRecord], str],
) -> "OrderedDict[str, List[EmployeeRecord]]":
    groups: Dict[str, List[EmployeeRecord]] = OrderedDict()
    for employee in employees:
        k = key(employee)
        if not k:
            continue
        groups.setdefault(k, []).append(employee)
    return OrderedDict((k, v) for k, v in groups.items() if len(v) > 1)


def find_duplicates(employees: Sequence[EmployeeRecord]) -> List[QualityIssue]:
    issues: List[QualityIssue] = []

    for name, cluster in _clusters(employees, lambda e: _normalize(e.name)).items():
        ids = sorted(e.id for e in cluster)
        issues.append(QualityIssue(
            id=f"duplicate-name-{'-'.join(ids)}",
            type=QualityIssueType.duplicate_name,
            severity=IssueSeverity.high,
            key=name,
            employee_ids=ids,
            employee_names=[e.name for e in cluster],
            description=f"Duplicate name found: {len(cluster)} records named {cluster[0].name}",
            suggested_action="Review and merge duplicate records or update name if different person",
        ))

    for email, cluster in _clusters(employees, lambda e: _normalize(e.email)).items():
        ids = sorted(e.id for e in cluster)
        issues.append(QualityIssue(
            id=f"duplicate-email-{'-'.join(ids)}",
            type=QualityIssueType.duplicate_email,
            severity=IssueSeverity.critical,
            key=email,
            employee_ids=ids,
            employee_names=[e.name for e in cluster],
            description=f"Duplicate email ({email}): used by {', '.join(e.name for e in cluster)}",
            suggested_action="Merge duplicate records or update email - emails must be unique",
        ))

    if issues:
        logger.info(f"Found {len(issues)} duplicate cluster(s) across {len(employees)} employees")
    return issues
