"""
Audit Routes - Brand compliance auditing of documents.
"""
from typing import List

from fastapi import APIRouter, HTTPException
import structlog

from asset_factory.models import AuditRequest, AuditResponse, Node
from asset_factory.services.asset_engine import asset_engine
from asset_factory.services.audit_engine import audit_engine

logger = structlog.get_logger()

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.post("/run", response_model=AuditResponse)
async def run_audit(request: AuditRequest):
    """
    Audit documents against the active brand configuration.

    Documents can be posted inline, referenced by the id of a previously
    generated asset, or both. Unknown ids are listed in ``missing``.

    Each result carries:
    - passed: False if any error-severity check failed
    - score: percentage of checks that passed
    - checks: the seven individual check outcomes
    - warnings: messages of failed warning-severity checks
    """
    if not request.documents and not request.node_ids:
        raise HTTPException(status_code=400, detail="No documents to audit")

    roots: List[Node] = list(request.documents)
    missing: List[str] = []
    for node_id in request.node_ids:
        document = asset_engine.get_document(node_id)
        if document is None:
            missing.append(node_id)
        else:
            roots.append(document)

    try:
        results = audit_engine.audit_many(roots)
    except Exception as e:
        logger.error("audit_failed", error=str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Audit failed: {str(e)}"
        )

    logger.info(
        "audit_request_completed",
        audited=len(results),
        missing=len(missing),
        failed=sum(1 for r in results if not r.passed)
    )
    return AuditResponse(results=results, missing=missing)


@router.get("/checks")
async def get_checks():
    """List the registered checks in execution order."""
    return {
        "checks": [name for name, _ in audit_engine.checks],
        "allowed_fonts": audit_engine.allowed_fonts()
    }
