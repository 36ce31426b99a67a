"""Reconstruction service (FastAPI).

Endpoints:
- POST /reconstruct           – P(t) via Lagrange (default t = 0, the secret)
- POST /coefficients          – all coefficients via the Vandermonde system
- POST /verify                – full cross-validation report
- POST /reconstruct_document  – secret from a raw share document
- GET  /audit                 – journal of every request and rejection

Points arrive as numerals in a base; they are decoded, deduplicated and
the k smallest-x points are selected before any arithmetic runs.

Error mapping:
    decode errors               -> 422
    repeated x / singular       -> 409
    too few points, bad doc     -> 400
    more than MAX_POINTS        -> 413
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from polyrecon.arith.digits import DecodeError, decode, decode_lenient
from polyrecon.arith.rational import format_rational
from polyrecon.config import DEFAULT_CHECK_POINTS, DEFAULT_TARGET, MAX_POINTS
from polyrecon.interp import lagrange, vandermonde, verify
from polyrecon.interp.points import (
    InsufficientPointsError,
    Point,
    PointSet,
    SingularSystemError,
    select_points,
)
from polyrecon.service.audit import AuditLog, fingerprint
from polyrecon.shares.document import ShareDocumentError, parse_document

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(title="polyrecon")

_audit = AuditLog()

# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PointIn(BaseModel):
    x: int
    value: Union[str, int]
    base: int = 10

    @field_validator("value")
    @classmethod
    def _as_text(cls, v: Union[str, int]) -> str:
        return str(v)


class ReconstructRequest(BaseModel):
    points: List[PointIn]
    k: Optional[int] = None  # defaults to len(points)
    t: int = DEFAULT_TARGET
    # strict rejects any stray character; lenient skips separators
    strict: bool = True


class VerifyRequest(ReconstructRequest):
    check_points: List[int] = list(DEFAULT_CHECK_POINTS)


class ReconstructResponse(BaseModel):
    result: str
    integral: bool
    t: int
    k: int
    selected_x: List[int]


class CoefficientsResponse(BaseModel):
    coefficients: List[str]
    k: int
    selected_x: List[int]


class AuditResponse(BaseModel):
    entries: List[Dict[str, Any]]
    chain_valid: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _reject(endpoint: str, status: int, reason: str) -> HTTPException:
    logger.warning("%s rejected (%d): %s", endpoint, status, reason)
    _audit.append("rejected", {"endpoint": endpoint, "status": status, "reason": reason})
    return HTTPException(status, reason)


def _select(endpoint: str, req: ReconstructRequest) -> PointSet:
    """Decode and select the point set, mapping failures to HTTP errors."""
    if len(req.points) > MAX_POINTS:
        raise _reject(endpoint, 413, f"at most {MAX_POINTS} points accepted")
    k = req.k if req.k is not None else len(req.points)
    decoder = decode if req.strict else decode_lenient
    try:
        candidates = [Point(p.x, decoder(p.value, p.base)) for p in req.points]
        return select_points(candidates, k)
    except DecodeError as exc:
        raise _reject(endpoint, 422, str(exc))
    except SingularSystemError as exc:
        raise _reject(endpoint, 409, str(exc))
    except (InsufficientPointsError, ValueError) as exc:
        raise _reject(endpoint, 400, str(exc))


def _solve_or_reject(endpoint: str, fn, *args):
    try:
        return fn(*args)
    except SingularSystemError as exc:
        raise _reject(endpoint, 409, str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post("/reconstruct", response_model=ReconstructResponse)
def reconstruct(req: ReconstructRequest):
    """Evaluate the interpolating polynomial at ``t`` (the secret for t=0)."""
    pts = _select("reconstruct", req)
    value = _solve_or_reject("reconstruct", lagrange.evaluate, pts, req.t)
    result = format_rational(value)
    _audit.append(
        "reconstruct",
        {"points": fingerprint(pts), "k": len(pts), "t": req.t, "result": result},
    )
    logger.info("reconstructed P(%d) from %d points", req.t, len(pts))
    return ReconstructResponse(
        result=result,
        integral=value.is_integer,
        t=req.t,
        k=len(pts),
        selected_x=[p.x for p in pts],
    )


@app.post("/coefficients", response_model=CoefficientsResponse)
def coefficients(req: ReconstructRequest):
    """Recover every coefficient by Gaussian elimination."""
    pts = _select("coefficients", req)
    coeffs = _solve_or_reject("coefficients", vandermonde.solve, pts)
    _audit.append("coefficients", {"points": fingerprint(pts), "k": len(pts)})
    return CoefficientsResponse(
        coefficients=[format_rational(c) for c in coeffs],
        k=len(pts),
        selected_x=[p.x for p in pts],
    )


@app.post("/verify", response_model=verify.VerificationReport)
def verify_points(req: VerifyRequest):
    """Cross-validate both reconstruction paths on the selected points."""
    pts = _select("verify", req)
    report = _solve_or_reject("verify", verify.verify, pts, req.check_points)
    _audit.append(
        "verify",
        {"points": fingerprint(pts), "k": len(pts), "ok": report.ok, "secret": report.secret},
    )
    if not report.ok:
        logger.error("verification mismatch: %s", "; ".join(report.mismatches))
    return report


@app.post("/reconstruct_document", response_model=ReconstructResponse)
def reconstruct_document(document: Dict[str, Any], strict: bool = False):
    """Reconstruct the secret from a share document.

    Documents are decoded leniently unless ``?strict=true``: separators
    inside stored numerals are skipped, out-of-range digits still fail.
    """
    endpoint = "reconstruct_document"
    try:
        doc = parse_document(document)
        if len(doc.entries) > MAX_POINTS:
            raise _reject(endpoint, 413, f"at most {MAX_POINTS} points accepted")
        pts = doc.select(strict=strict)
    except DecodeError as exc:
        raise _reject(endpoint, 422, str(exc))
    except SingularSystemError as exc:
        raise _reject(endpoint, 409, str(exc))
    except (ShareDocumentError, InsufficientPointsError) as exc:
        raise _reject(endpoint, 400, str(exc))

    value = _solve_or_reject(endpoint, lagrange.reconstruct_secret, pts)
    result = format_rational(value)
    _audit.append(
        endpoint,
        {"points": fingerprint(pts), "k": len(pts), "n": doc.keys.n, "result": result},
    )
    return ReconstructResponse(
        result=result,
        integral=value.is_integer,
        t=DEFAULT_TARGET,
        k=len(pts),
        selected_x=[p.x for p in pts],
    )


@app.get("/audit")
def audit():
    """Return the full audit journal."""
    return AuditResponse(entries=_audit.entries(), chain_valid=_audit.verify_chain())
