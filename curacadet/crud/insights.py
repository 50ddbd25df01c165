import re

from sqlalchemy import and_, desc, distinct, func
from sqlalchemy.orm import Session

from curacadet.core.exceptions import ValidationError
from curacadet.db.models.cadet import Cadet
from curacadet.db.models.medical_record import MedicalRecord, STATUS_ACTIVE

OVERWEIGHT_BMI = 25
UNDERWEIGHT_BMI = 18.5
HIGH_RISK_LIMIT = 50

DRILLDOWN_TYPES = ("all", "sick", "healthy", "never_reported")


def parse_bmi(value):
    """BMI is free text on the cadet form ("24.5", "27 kg/m2"); keep digits and dots."""
    if not value:
        return None
    cleaned = re.sub(r"[^0-9.]", "", value)
    try:
        return float(cleaned)
    except ValueError:
        return None


def bmi_category(bmi: float) -> str:
    if bmi > OVERWEIGHT_BMI:
        return "Overweight"
    if bmi < UNDERWEIGHT_BMI:
        return "Underweight"
    return "Normal"


def _active_join():
    return and_(
        MedicalRecord.cadet_id == Cadet.id,
        MedicalRecord.medical_status == STATUS_ACTIVE,
    )


def _cadet_summary(cadet: Cadet, status: str, **extra) -> dict:
    summary = {
        "id": cadet.id,
        "name": cadet.name,
        "company": cadet.company,
        "academy_number": cadet.academy_number,
        "status": status,
    }
    summary.update(extra)
    return summary


def get_company_stats(db: Session) -> list:
    total = func.count(distinct(Cadet.id)).label("total_cadets")
    rows = (
        db.query(
            Cadet.company,
            total,
            func.count(distinct(MedicalRecord.cadet_id)).label("active_sick"),
        )
        .outerjoin(MedicalRecord, _active_join())
        .filter(Cadet.company.isnot(None))
        .group_by(Cadet.company)
        .order_by(desc(total), Cadet.company)
        .all()
    )
    return [
        {"company": company, "total_cadets": total_cadets, "active_sick": active_sick}
        for company, total_cadets, active_sick in rows
    ]


def get_insight_stats(db: Session) -> dict:
    cadets_with_bmi = (
        db.query(Cadet)
        .filter(Cadet.bmi.isnot(None), Cadet.bmi != "")
        .order_by(Cadet.id)
        .all()
    )

    bmi_counts = {}
    high_risk = []
    for cadet in cadets_with_bmi:
        bmi = parse_bmi(cadet.bmi)
        if bmi is None:
            continue
        category = bmi_category(bmi)
        bmi_counts[category] = bmi_counts.get(category, 0) + 1
        if category == "Overweight" and len(high_risk) < HIGH_RISK_LIMIT:
            high_risk.append({
                "id": cadet.id,
                "name": cadet.name,
                "company": cadet.company,
                "academy_number": cadet.academy_number,
                "bmi": cadet.bmi,
            })

    active_cases = (
        db.query(func.count(MedicalRecord.id))
        .filter(MedicalRecord.medical_status == STATUS_ACTIVE)
        .scalar()
    )
    never_reported = (
        db.query(func.count(Cadet.id))
        .outerjoin(MedicalRecord, MedicalRecord.cadet_id == Cadet.id)
        .filter(MedicalRecord.id.is_(None))
        .scalar()
    )
    total_cadets = db.query(func.count(Cadet.id)).scalar()

    return {
        "company_stats": get_company_stats(db),
        "bmi_stats": [
            {"category": category, "count": count}
            for category, count in sorted(bmi_counts.items())
        ],
        "high_risk_cadets": high_risk,
        "active_cases": active_cases,
        "never_reported": never_reported,
        "total_cadets": total_cadets,
    }


def get_drilldown(db: Session, company: str | None, kind: str | None = None) -> list:
    """Cadets behind one slice of the company chart."""
    if not company:
        raise ValidationError("Company is required")
    kind = kind or "all"
    if kind not in DRILLDOWN_TYPES:
        raise ValidationError(f"Type must be one of: {', '.join(DRILLDOWN_TYPES)}")

    if kind == "sick":
        rows = (
            db.query(Cadet, MedicalRecord)
            .join(MedicalRecord, _active_join())
            .filter(Cadet.company == company)
            .order_by(Cadet.name)
            .all()
        )
        return [
            _cadet_summary(
                cadet,
                record.medical_problem,
                date_of_reporting=record.date_of_reporting,
            )
            for cadet, record in rows
        ]

    if kind == "never_reported":
        # Across all companies, as on the insights page
        cadets = (
            db.query(Cadet)
            .outerjoin(MedicalRecord, MedicalRecord.cadet_id == Cadet.id)
            .filter(MedicalRecord.id.is_(None))
            .order_by(Cadet.name)
            .all()
        )
        return [_cadet_summary(cadet, "Clean Record") for cadet in cadets]

    if kind == "healthy":
        cadets = (
            db.query(Cadet)
            .outerjoin(MedicalRecord, _active_join())
            .filter(Cadet.company == company, MedicalRecord.id.is_(None))
            .order_by(Cadet.name)
            .all()
        )
        return [_cadet_summary(cadet, "Fit") for cadet in cadets]

    rows = (
        db.query(Cadet, MedicalRecord)
        .outerjoin(MedicalRecord, _active_join())
        .filter(Cadet.company == company)
        .order_by(Cadet.name)
        .all()
    )
    return [
        _cadet_summary(cadet, record.medical_problem if record is not None else "Fit")
        for cadet, record in rows
    ]
