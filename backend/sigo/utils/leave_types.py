"""
Leave type catalog (afastamentos).
Some types do not count as effective service time for promotion/retirement.
"""
from types import MappingProxyType
from typing import NamedTuple


class LeaveType(NamedTuple):
    id: str
    label: str
    counts_toward_service: bool
    clause: str


_TYPES: list[LeaveType] = [
    LeaveType("FERIAS", "Férias", True, "I"),
    LeaveType("LICENCA_PREMIO", "Licença-Prêmio", True, "II"),
    LeaveType("LICENCA_SAUDE_FAMILIA", "Lic. Saúde Família", True, "III"),
    LeaveType("LTS", "Lic. Tratamento Saúde (LTS)", True, "IV"),
    LeaveType("CONVALESCENCA", "Convalescença", True, "IV"),
    LeaveType("LICENCA_GESTANTE", "Licença-Gestante", True, "V"),
    LeaveType("LICENCA_PATERNIDADE", "Licença-Paternidade", True, "VI"),
    LeaveType("LICENCA_ADOCAO", "Licença por Adoção", True, "VII"),
    LeaveType("LICENCA_CASAMENTO", "Núpcias (Gala)", True, "VIII"),
    LeaveType("LICENCA_NOJO", "Luto (Nojo)", True, "IX"),
    LeaveType("LTS_COMPULSORIA", "Licença Compulsória", True, "X"),
    LeaveType("MISSAO_ESTUDOS", "Missão/Estudos", True, "XI"),
    LeaveType("TREINAMENTO_CURSO", "Treinamento/Curso", True, "XII"),
    LeaveType("TRANSITO_MUDANCA", "Trânsito/Mudança", True, "XIII"),
    LeaveType("JURI", "Júri", True, "XIV"),
    LeaveType("DOACAO_SANGUE", "Doação de Sangue", True, "XV"),
    LeaveType("LIC_TRATAR_INT_PARTICULAR", "Lic. Interesse Particular", False, "XVI"),
    LeaveType("LIC_ACOMP_CONJUGE", "Lic. Acomp. Cônjuge", False, "XVII"),
    LeaveType("LIC_EXERC_ATIV_PRIVADA", "Lic. Atividade Privada", False, "XVIII"),
    LeaveType("PRISAO", "Prisão", False, "-"),
    LeaveType("AGREGACAO", "Agregação", False, "-"),
    LeaveType("OUTROS", "Outros Afastamentos", True, "-"),
]

LEAVE_TYPES: MappingProxyType[str, LeaveType] = MappingProxyType({t.id: t for t in _TYPES})

LEAVE_TYPE_IDS: tuple[str, ...] = tuple(t.id for t in _TYPES)

NON_SERVICE_LEAVE_TYPES: frozenset[str] = frozenset(
    t.id for t in _TYPES if not t.counts_toward_service
)

SERVICE_TIME_WARNING = (
    "Este tipo de afastamento NÃO conta como efetivo exercício para aposentadoria/promoção."
)


def counts_toward_service(leave_type: str) -> bool:
    """Unknown types count by default – the schema already restricts input to the catalog."""
    return leave_type not in NON_SERVICE_LEAVE_TYPES


def career_impact_warnings(leave_type: str) -> list[str]:
    if counts_toward_service(leave_type):
        return []
    return [SERVICE_TIME_WARNING]
