# src/lendrate/adapters/rate_records.py
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Mapping

from dateutil import parser as dtp

from lendrate.domain.errors import InvalidRateRecord
from lendrate.domain.offers import LenderRateOffer, LoanType, OfferCondition


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


def _to_decimal(x: Any, field_name: str) -> Decimal:
    if x is None or isinstance(x, bool):
        raise InvalidRateRecord(f"Missing or invalid {field_name}")
    try:
        d = Decimal(str(x).strip().replace("%", "").replace(",", ""))
    except Exception as err:
        raise InvalidRateRecord(f"Invalid {field_name}: {x!r}") from err
    if not d.is_finite():
        raise InvalidRateRecord(f"Invalid {field_name}: {x!r} must be finite")
    return d


def _to_decimal_optional(x: Any, field_name: str) -> Decimal | None:
    if x is None or (isinstance(x, str) and not x.strip()):
        return None
    return _to_decimal(x, field_name)


def _to_bool(x: Any, default: bool) -> bool:
    if x is None:
        return default
    if isinstance(x, str):
        return x.strip().lower() in {"1", "true", "yes", "y"}
    return bool(x)


def _to_fraction(x: Any, field_name: str) -> Decimal:
    # providers send 7.5 or 0.075 for the same rate
    d = _to_decimal(x, field_name)
    return d / 100 if d > 1 else d


def _to_datetime(x: Any) -> datetime:
    if isinstance(x, datetime):
        return x
    if x:
        try:
            return dtp.parse(str(x))
        except (ValueError, OverflowError) as err:
            raise InvalidRateRecord(f"Invalid lastUpdated: {x!r}") from err
    return datetime.now(timezone.utc)


def _to_conditions(x: Any) -> frozenset[OfferCondition]:
    if x is None:
        return frozenset()
    if isinstance(x, str):
        x = [c for c in x.split(",") if c.strip()]
    out = set()
    for c in x:
        tag = str(c).strip().lower()
        try:
            out.add(OfferCondition(tag))
        except ValueError as err:
            raise InvalidRateRecord(f"Unknown condition tag: {tag!r}") from err
    return frozenset(out)


def offer_from_record(raw: Mapping[str, Any], loan_type: LoanType | str) -> LenderRateOffer:
    """
    Normalize one provider rate record (camelCase or snake_case) into a LenderRateOffer.

    Raises InvalidRateRecord when a required field is missing or unparseable,
    or when the record breaks an offer invariant.
    """
    if not isinstance(raw, Mapping):
        raise InvalidRateRecord(f"Rate record must be an object, got {type(raw).__name__}")

    try:
        lt = LoanType(getattr(loan_type, "value", loan_type))
    except ValueError as err:
        raise InvalidRateRecord(f"Unknown loan type: {loan_type!r}") from err

    lender_id = str(_pick(raw, "lenderId", "lender_id") or "").strip()
    if not lender_id:
        raise InvalidRateRecord("Missing lenderId")

    min_credit = _to_decimal(_pick(raw, "minCreditScore", "min_credit_score"), "minCreditScore")

    try:
        return LenderRateOffer(
            lender_id=lender_id,
            lender_name=str(_pick(raw, "lenderName", "lender_name") or lender_id).strip(),
            loan_program=str(_pick(raw, "loanProgram", "loan_program") or "").strip(),
            loan_type=lt,
            rate=_to_fraction(_pick(raw, "rate", "interestRate", "interest_rate"), "rate"),
            points=_to_decimal(_pick(raw, "points") or 0, "points"),
            fees=_to_decimal(_pick(raw, "fees") or 0, "fees"),
            max_ltv=_to_fraction(_pick(raw, "maxLTV", "maxLtv", "max_ltv"), "maxLTV"),
            min_dscr=_to_decimal_optional(_pick(raw, "minDSCR", "minDscr", "min_dscr"), "minDSCR"),
            min_credit_score=int(min_credit),
            min_loan_amount=_to_decimal(_pick(raw, "minLoanAmount", "min_loan_amount") or 0, "minLoanAmount"),
            max_loan_amount=_to_decimal(_pick(raw, "maxLoanAmount", "max_loan_amount"), "maxLoanAmount"),
            terms=str(_pick(raw, "terms", "term") or ""),
            prepayment_penalty=_to_bool(_pick(raw, "prepaymentPenalty", "prepayment_penalty"), False),
            is_active=_to_bool(_pick(raw, "isActive", "is_active"), True),
            last_updated=_to_datetime(_pick(raw, "lastUpdated", "last_updated")),
            conditions=_to_conditions(_pick(raw, "conditions")),
        )
    except InvalidRateRecord:
        raise
    except ValueError as err:
        raise InvalidRateRecord(f"{lender_id}: {err}") from err
