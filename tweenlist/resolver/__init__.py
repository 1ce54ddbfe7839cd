"""Position resolution pipeline: natural slots, sections, and sticky headers."""

from __future__ import annotations

from .natural import closest_occurrence_at_or_before, natural_slots, wrap_index
from .sections import group_sections
from .selection import find_covered_selected, is_evictable, seed_selected_stack
from .sticky import (
    StepOutcome,
    StepResult,
    apply_sticky_stack,
    convergence_step,
    expected_parent_key,
    find_missing_parent,
    resolve_sticky_stack,
)

__all__ = [
    "StepOutcome",
    "StepResult",
    "apply_sticky_stack",
    "closest_occurrence_at_or_before",
    "convergence_step",
    "expected_parent_key",
    "find_covered_selected",
    "find_missing_parent",
    "group_sections",
    "is_evictable",
    "natural_slots",
    "resolve_sticky_stack",
    "seed_selected_stack",
    "wrap_index",
]
