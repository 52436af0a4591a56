# Centralised operator precedence for converter and solver
PRIORITY = {
    '^': 3,
    '*': 2, '/': 2,
    '+': 1, '-': 1,
}

OPERATORS = frozenset(PRIORITY)
BRACKETS = frozenset('()')


def priority(ch: str) -> int:
    """Precedence class of *ch*; brackets and anything unknown rank 0."""
    return PRIORITY.get(ch, 0)
