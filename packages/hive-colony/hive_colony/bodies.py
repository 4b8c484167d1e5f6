"""Body parts, costs and budget-scaled compositions."""
from __future__ import annotations

from collections import Counter
from typing import Sequence

WORK = "work"
CARRY = "carry"
MOVE = "move"

PART_COSTS: dict[str, int] = {WORK: 100, CARRY: 50, MOVE: 50}


def body_cost(body: Sequence[str]) -> int:
    """Total cost of a body. Raises KeyError for unknown parts."""
    return sum(PART_COSTS[part] for part in body)


def count_parts(body: Sequence[str], part: str) -> int:
    return sum(1 for p in body if p == part)


def carry_capacity(body: Sequence[str], per_part: int = 50) -> int:
    return count_parts(body, CARRY) * per_part


def minimal_composition(template: Sequence[str]) -> list[str]:
    """One part of each type the template uses, in first-appearance order."""
    return list(dict.fromkeys(template))


def affordable_composition(template: Sequence[str], budget: int) -> list[str] | None:
    """Largest sub-body of *template* that fits *budget*.

    Starts from the minimal composition and adds one part of each type per
    pass, round-robin, while the budget allows and the template still has
    parts of that type left. Returns None when even the minimal composition
    is unaffordable. The result keeps the template's part order.
    """
    if not template:
        return None
    minimal = minimal_composition(template)
    cost = body_cost(minimal)
    if cost > budget:
        return None

    wanted = Counter(template)
    chosen = Counter(minimal)
    added = True
    while added:
        added = False
        for part in minimal:
            if chosen[part] < wanted[part] and cost + PART_COSTS[part] <= budget:
                chosen[part] += 1
                cost += PART_COSTS[part]
                added = True

    body: list[str] = []
    for part in template:
        if chosen[part] > 0:
            body.append(part)
            chosen[part] -= 1
    return body
