"""Unweighted Levenshtein distance with an edit-operation breakdown.

Works on any sequences whose items compare with ``==`` (strings as character
sequences, token lists, tuples). The alignment is recovered by walking the
cost matrix back from the last cell; on equal cost the walk prefers
match, then substitution, then deletion, then insertion. The tie-break only
changes which edits are reported, never the distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

MATCH = "match"
SUBSTITUTE = "substitute"
DELETE = "delete"
INSERT = "insert"


@dataclass(frozen=True)
class AlignmentResult:
    matches: int = 0
    substitutions: int = 0
    deletions: int = 0
    insertions: int = 0

    @property
    def errors(self) -> int:
        return self.substitutions + self.deletions + self.insertions

    def to_dict(self) -> Dict[str, int]:
        return {
            "matches": self.matches,
            "substitutions": self.substitutions,
            "deletions": self.deletions,
            "insertions": self.insertions,
        }


@dataclass(frozen=True)
class EditOp:
    """One alignment step; indices are None on the side the op does not consume."""

    kind: str
    reference_index: Optional[int] = None
    candidate_index: Optional[int] = None


def _cost_matrix(reference: Sequence[Any], candidate: Sequence[Any]) -> List[List[int]]:
    n, m = len(reference), len(candidate)
    matrix = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n + 1):
        matrix[i][0] = i
    for j in range(m + 1):
        matrix[0][j] = j
    for i in range(1, n + 1):
        ref_item = reference[i - 1]
        prev_row = matrix[i - 1]
        row = matrix[i]
        for j in range(1, m + 1):
            cost = 0 if ref_item == candidate[j - 1] else 1
            row[j] = min(
                prev_row[j] + 1,         # deletion
                row[j - 1] + 1,          # insertion
                prev_row[j - 1] + cost,  # match / substitution
            )
    return matrix


def _backtrace(matrix: List[List[int]], reference: Sequence[Any], candidate: Sequence[Any]) -> List[EditOp]:
    ops: List[EditOp] = []
    i, j = len(reference), len(candidate)
    while i > 0 or j > 0:
        current = matrix[i][j]
        if i > 0 and j > 0 and reference[i - 1] == candidate[j - 1] and current == matrix[i - 1][j - 1]:
            ops.append(EditOp(MATCH, i - 1, j - 1))
            i, j = i - 1, j - 1
        elif i > 0 and j > 0 and current == matrix[i - 1][j - 1] + 1:
            ops.append(EditOp(SUBSTITUTE, i - 1, j - 1))
            i, j = i - 1, j - 1
        elif i > 0 and current == matrix[i - 1][j] + 1:
            ops.append(EditOp(DELETE, i - 1, None))
            i -= 1
        else:
            ops.append(EditOp(INSERT, None, j - 1))
            j -= 1
    ops.reverse()
    return ops


def _summarize(ops: Sequence[EditOp]) -> AlignmentResult:
    counts = {MATCH: 0, SUBSTITUTE: 0, DELETE: 0, INSERT: 0}
    for op in ops:
        counts[op.kind] += 1
    return AlignmentResult(
        matches=counts[MATCH],
        substitutions=counts[SUBSTITUTE],
        deletions=counts[DELETE],
        insertions=counts[INSERT],
    )


def edit_operations(reference: Sequence[Any], candidate: Sequence[Any]) -> List[EditOp]:
    """Return the alignment of `candidate` against `reference` in forward order.

    Doxygen:
    - @param reference: Ground-truth sequence.
    - @param candidate: Sequence to compare against the reference.
    - @return: List of EditOp covering both sequences left to right.
    """
    matrix = _cost_matrix(reference, candidate)
    return _backtrace(matrix, reference, candidate)


def edit_distance(reference: Sequence[Any], candidate: Sequence[Any]) -> Tuple[int, AlignmentResult]:
    """Compute the Levenshtein distance and its alignment counts.

    Doxygen:
    - @param reference: Ground-truth sequence.
    - @param candidate: Sequence to compare against the reference.
    - @return: (distance, AlignmentResult); distance equals the result's `errors`.
    """
    matrix = _cost_matrix(reference, candidate)
    alignment = _summarize(_backtrace(matrix, reference, candidate))
    return matrix[len(reference)][len(candidate)], alignment


def levenshtein_distance(a: Sequence[Any], b: Sequence[Any]) -> int:
    distance, _ = edit_distance(a, b)
    return distance
