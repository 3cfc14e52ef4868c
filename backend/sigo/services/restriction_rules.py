"""
Restriction code rules: normalization, catalog validation,
SE ⇒ UU implication (BG PM 232/08) and critical-code flagging.
Pure functions – no DB access.
"""
from dataclasses import dataclass, field
from typing import Iterable

from sigo.core.exceptions import InvalidCodeError, SigoError
from sigo.utils.restriction_codes import (
    CRITICAL_CODES,
    IMPLICATION_RULE,
    IMPLIED_CODES,
    is_valid_code,
)

# Terms in a medical opinion that may breach medical confidentiality
SENSITIVE_TERMS = ("HIV", "AIDS", "CÂNCER", "CANCER", "PSIQUIÁT", "PSIQUIAT", "MENTAL", "DEPRESSÃO", "DEPRESSAO")


@dataclass(frozen=True)
class RestrictionRuleResult:
    canonical_codes: list[str]
    has_critical: bool = False
    warnings: list[str] = field(default_factory=list)


def normalize_codes(codes: Iterable[str]) -> list[str]:
    """Uppercase, strip and deduplicate, keeping first-seen order. Blank entries are dropped."""
    seen: dict[str, None] = {}
    for code in codes:
        code = code.strip().upper()
        if code:
            seen.setdefault(code, None)
    return list(seen)


def apply_restriction_rules(codes: Iterable[str]) -> RestrictionRuleResult:
    """
    Canonicalize a restriction's codes. At least one code is required; an
    empty list raises SigoError rather than producing an empty restriction.
    """
    normalized = normalize_codes(codes)
    if not normalized:
        raise SigoError("Informe ao menos um código de restrição")

    # Validation runs before the implication so unknown codes are never dropped
    invalid = [c for c in normalized if not is_valid_code(c)]
    if invalid:
        raise InvalidCodeError(invalid)

    final = set(normalized)
    warnings: list[str] = []

    # Single step: an implied code never triggers another implication
    for source, implied in IMPLIED_CODES.items():
        if source in final and implied not in final:
            final.add(implied)
            warnings.append(
                f"Código {implied} adicionado automaticamente conforme {IMPLICATION_RULE} "
                f"({source} implica em {implied})"
            )

    has_critical = has_critical_code(final)
    if has_critical:
        warnings.append(
            f"ATENÇÃO: Códigos críticos presentes: {', '.join(sorted(final & CRITICAL_CODES))}. "
            "Impactam severamente o emprego operacional."
        )

    return RestrictionRuleResult(
        canonical_codes=sorted(final),
        has_critical=has_critical,
        warnings=warnings,
    )


def has_critical_code(codes: Iterable[str]) -> bool:
    return any(c in CRITICAL_CODES for c in codes)


def medical_opinion_warnings(opinion: str | None) -> list[str]:
    if not opinion:
        return []
    text = opinion.upper()
    if any(term in text for term in SENSITIVE_TERMS):
        return [
            "ATENÇÃO: O parecer médico pode conter informações sigilosas. "
            "Verifique a conformidade com a legislação de sigilo médico."
        ]
    return []
