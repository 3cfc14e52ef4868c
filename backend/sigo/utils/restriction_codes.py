"""
Catalog of medical restriction codes (Junta de Saúde).
Static reference data – built once at import, never mutated.
"""
from types import MappingProxyType
from typing import NamedTuple


class RestrictionCode(NamedTuple):
    code: str
    description: str
    detail: str
    critical: bool = False


_CODES: list[RestrictionCode] = [
    RestrictionCode("AU", "Audição seja primordial", "Atividades administrativas"),
    RestrictionCode("BS", "Busca e salvamento", "Operacional na Unidade ou apoio"),
    RestrictionCode("CB", "Corte de barba", "Uniforme B-5.1"),
    RestrictionCode("CC", "Corte de cabelo", "Uniforme B-5.1, gel/rede"),
    RestrictionCode("CI", "Correr para incêndio", "Apoio/Admin"),
    RestrictionCode("DG", "Datilografia e Digitação", "Policiamento ostensivo"),
    RestrictionCode("DV", "Dirigir veículo", "Não pode ser motorista", critical=True),
    RestrictionCode("EF", "Educação Física", "Plano compatível"),
    RestrictionCode("EM", "Escrever a mão", "Policiamento ostensivo"),
    RestrictionCode("EP", "Equilíbrio seja primordial", "Atividades administrativas"),
    RestrictionCode("ES", "Exposição ao sol", "Atividades administrativas"),
    RestrictionCode("FO", "Formatura", "Apoio/Admin"),
    RestrictionCode("IS", "Tocar instrumento de sopro", "Apoio/Admin"),
    RestrictionCode("LP", "Longa permanência em pé", "Apoio/Admin"),
    RestrictionCode("LR", "Locais ruidosos", "Atividades administrativas"),
    RestrictionCode("LS", "Longa permanência sentado", "Policiamento ostensivo"),
    RestrictionCode("MA", "Manuseio com animais", "Apoio/Admin"),
    RestrictionCode("MC", "Montar a cavalo", "Apoio/Admin"),
    RestrictionCode("MG", "Mergulho", "Apoio/Admin"),
    RestrictionCode("MP", "Manipulação de pó", "Policiamento ostensivo"),
    RestrictionCode("OU", "Ordem unida", "Apoio/Admin"),
    RestrictionCode("PO", "Policiamento", "Guarda/Admin/Apoio", critical=True),
    RestrictionCode("PQ", "Serviços com produtos químicos", "Apoio/Admin"),
    RestrictionCode("PT", "Prática de tiro", "Atividades administrativas"),
    RestrictionCode("SA", "Serviços aquáticos", "Apoio/Admin"),
    RestrictionCode("SB", "Serviços burocráticos", "Policiamento ostensivo"),
    RestrictionCode("SE", "Serviços externos", "Implica em UU - BG PM 232/08", critical=True),
    RestrictionCode("SF", "Subir e descer frequente", "Apoio/Admin"),
    RestrictionCode("SG", "Serviço de guarda", "Preferencialmente PO"),
    RestrictionCode("SH", "Serviços em altura", "Operacional limitado"),
    RestrictionCode("SI", "Serviços internos", "Policiamento ostensivo"),
    RestrictionCode("SM", "Serviços manuais", "Operacional limitado"),
    RestrictionCode("SN", "Serviços noturnos", "Diurno apenas"),
    RestrictionCode("SP", "Serviços pesados", "Operacional limitado"),
    RestrictionCode("ST", "Serviços de telefonia", "Policiamento ostensivo"),
    RestrictionCode("UA", "Uso de arma", "Administrativo apenas", critical=True),
    RestrictionCode("UB", "Uso de botas", "Sandália/Tênis"),
    RestrictionCode("UC", "Uso de calçado esportivo", "Sandália"),
    RestrictionCode("US", "Uso de sapatos", "Sandália"),
    RestrictionCode("UU", "Uso de uniformes", "Usa B-5.1 ou Civil"),
    RestrictionCode("VP", "Visão seja primordial", "Atividades administrativas"),
]

RESTRICTION_CODES: MappingProxyType[str, RestrictionCode] = MappingProxyType(
    {c.code: c for c in _CODES}
)

# Codes that severely limit operational deployment
CRITICAL_CODES: frozenset[str] = frozenset(c.code for c in _CODES if c.critical)

# BG PM 232/08: external-service restriction implies the uniform restriction
IMPLIED_CODES: MappingProxyType[str, str] = MappingProxyType({"SE": "UU"})
IMPLICATION_RULE = "BG PM 232/08"


def is_valid_code(code: str) -> bool:
    return code in RESTRICTION_CODES

