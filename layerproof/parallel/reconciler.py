"""Put analysed layers back onto the full, unfiltered request list."""

from __future__ import annotations

from typing import List

from ..types import FragmentResult, TextFragment


def reconcile(
    original: List[TextFragment],
    results: List[FragmentResult],
) -> List[TextFragment]:
    """
    Return one fragment per input fragment, in input order.

    A fragment takes the first result with the same ``id``; fragments that
    were filtered out (or have no result) come back with no issues.
    Duplicate ids are not detected.
    """
    reconciled: List[TextFragment] = []
    for fragment in original:
        match = next((r for r in results if r.fragment_id == fragment.id), None)
        if match is not None:
            reconciled.append(match.fragment)
        else:
            reconciled.append(fragment.with_issues([]))
    return reconciled
