from types import MappingProxyType

# Ordered from lowest to highest
RANKS: tuple[str, ...] = ("SD", "CB", "SGT3", "SGT2", "SGT1", "SUBTEN", "TEN2", "TEN1", "CAP")

RANK_LABELS: MappingProxyType[str, str] = MappingProxyType({
    "SD": "Sd PM",
    "CB": "Cb PM",
    "SGT3": "3º Sgt PM",
    "SGT2": "2º Sgt PM",
    "SGT1": "1º Sgt PM",
    "SUBTEN": "Subten PM",
    "TEN2": "2º Ten PM",
    "TEN1": "1º Ten PM",
    "CAP": "Cap PM",
})


def rank_label(rank: str) -> str:
    return RANK_LABELS.get(rank, rank)


def rank_order(rank: str) -> int:
    return RANKS.index(rank) if rank in RANKS else -1


def military_name(rank: str, war_name: str) -> str:
    """Display form used in lists, e.g. 'Cb PM PEREIRA'."""
    return f"{rank_label(rank)} {war_name}"
