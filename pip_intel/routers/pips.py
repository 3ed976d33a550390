from datetime import date

from fastapi import APIRouter

from pip_intel.models.insight import DocumentationScore, PIPEvaluation
from pip_intel.schemas.pip import (
    AuditTrailRequest,
    AuditTrailResponse,
    DocumentContextRequest,
    DocumentContextResponse,
    PIPRecords,
)
from pip_intel.services.document_projection import (
    build_audit_trail,
    build_document_context,
    format_audit_trail,
)
from pip_intel.services.documentation_scorer import score_documentation
from pip_intel.services.pip_evaluator import evaluate_pip

router = APIRouter(prefix="/pips")


def _as_of(records: PIPRecords) -> date:
    return records.as_of or date.today()


@router.post("/evaluate", response_model=PIPEvaluation)
def evaluate(records: PIPRecords):
    """Trajectory, compliance alerts and manager recommendations for an active PIP."""
    return evaluate_pip(
        records.pip,
        records.expectations,
        records.check_ins,
        records.milestone_reviews,
        _as_of(records),
    )


@router.post("/documentation-score", response_model=DocumentationScore)
def documentation_score(records: PIPRecords):
    return score_documentation(
        records.pip,
        records.expectations,
        records.check_ins,
        records.milestone_reviews,
        _as_of(records),
    )


@router.post("/document-context", response_model=DocumentContextResponse)
def document_context(request: DocumentContextRequest):
    context = build_document_context(
        request.pip,
        request.employee_name,
        request.expectations,
        request.check_ins,
        request.milestone_reviews,
        _as_of(request),
        request.date_format,
    )
    return DocumentContextResponse(pip_id=request.pip.id, context=context)


@router.post("/audit-trail", response_model=AuditTrailResponse)
def audit_trail(request: AuditTrailRequest):
    entries = build_audit_trail(
        request.pip,
        request.expectations,
        request.check_ins,
        request.milestone_reviews,
    )
    document = format_audit_trail(
        entries,
        request.pip,
        request.employee_name,
        _as_of(request),
        request.employee_title,
        request.date_format,
    )
    return AuditTrailResponse(pip_id=request.pip.id, entries=entries, document=document)
