from dataclasses import dataclass


@dataclass(frozen=True)
class CaseFields:
    """Structured fields pulled from document text; None when not found."""

    case_number: str | None = None
    plaintiffs: str | None = None
    defendants: str | None = None
    claimants: str | None = None
    filing_date: str | None = None
    judge_name: str | None = None
    location: str | None = None
    amounts: tuple[str, ...] = ()
