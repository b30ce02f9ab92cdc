from __future__ import annotations

import itertools
import random

from hint_app.hints.models import HintEntry
from hint_app.hints.selector import select_active


def _entries(*specs):
    return [HintEntry(hint_id, priority, seq) for seq, (hint_id, priority) in enumerate(specs)]


def test_select_active_returns_none_for_empty_inputs():
    assert select_active([], set()) is None
    assert select_active(_entries(("a", 1)), {"a"}) is None


def test_select_active_prefers_lowest_priority():
    entries = _entries(("hint1", 5), ("hint2", 2), ("hint3", 9))
    assert select_active(entries, set()) == "hint2"
    assert select_active(entries, {"hint2"}) == "hint1"
    assert select_active(entries, {"hint1", "hint2"}) == "hint3"


def test_select_active_breaks_ties_by_registration_sequence():
    entries = [HintEntry("late", 1, 7), HintEntry("early", 1, 3), HintEntry("low", 4, 0)]
    assert select_active(entries, set()) == "early"
    assert select_active(list(reversed(entries)), set()) == "early"


def test_select_active_matches_brute_force_minimum():
    rng = random.Random(1234)
    ids = ["a", "b", "c", "d", "e"]
    for _ in range(200):
        entries = [HintEntry(hint_id, rng.randint(-2, 3), seq) for seq, hint_id in enumerate(ids)]
        rng.shuffle(entries)
        for size in range(len(ids) + 1):
            for viewed in itertools.combinations(ids, size):
                remaining = [e for e in entries if e.id not in viewed]
                expected = (
                    min(remaining, key=lambda e: (e.priority, e.sequence)).id if remaining else None
                )
                assert select_active(entries, set(viewed)) == expected
                # Deterministic for identical inputs.
                assert select_active(entries, set(viewed)) == expected
