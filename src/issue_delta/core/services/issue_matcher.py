from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..domain.models import Issue, IssueCode, MatchedPair

# (position in its source list, issue)
_Indexed = tuple[int, Issue]


def _line_order(item: _Indexed) -> tuple[bool, int, int]:
    index, issue = item
    # Issues without a start line sort after located ones, then by list order.
    return (issue.start_line is None, issue.start_line or 0, index)


def _split_named(items: list[_Indexed]) -> tuple[list[_Indexed], list[_Indexed]]:
    named = sorted((i for i in items if i[1].function_name is not None), key=_line_order)
    unnamed = sorted((i for i in items if i[1].function_name is None), key=_line_order)
    return named, unnamed


class IssueMatcher:
    """Pairs issues across two snapshots with a best-effort positional key.

    Issues have no identity that survives re-analysis, so the key is
    (issue_code, function_name) when both sides name a function, and
    issue_code alone otherwise. Within a key, issues are paired in
    ascending start_line order (ties broken by original list order).
    Every input issue ends up in exactly one pair.
    """

    def match(self, before: Sequence[Issue], after: Sequence[Issue]) -> list[MatchedPair]:
        """Pair two issue sequences.

        Args:
            before: Issues of the earlier snapshot
            after: Issues of the later snapshot

        Returns:
            Pairs with a before side in before-list order, followed by
            after-only pairs in after-list order
        """
        before_items = list(enumerate(before))
        after_items = list(enumerate(after))

        # before index -> after index (or None)
        links: dict[int, int | None] = {}
        used_after: set[int] = set()

        # Pass 1: exact (code, function_name) groups
        named_before: dict[tuple[IssueCode, str], list[_Indexed]] = defaultdict(list)
        named_after: dict[tuple[IssueCode, str], list[_Indexed]] = defaultdict(list)
        for item in before_items:
            if item[1].function_name is not None:
                named_before[(item[1].issue_code, item[1].function_name)].append(item)
        for item in after_items:
            if item[1].function_name is not None:
                named_after[(item[1].issue_code, item[1].function_name)].append(item)

        for key, group in named_before.items():
            b_sorted = sorted(group, key=_line_order)
            a_sorted = sorted(named_after.get(key, []), key=_line_order)
            for (b_idx, _), (a_idx, _) in zip(b_sorted, a_sorted):
                links[b_idx] = a_idx
                used_after.add(a_idx)

        # Pass 2: leftovers by code alone. Named leftovers of the same name
        # exist on one side only, so a named issue can only take an unnamed
        # one; those pairs go first, unnamed with unnamed last.
        left_before: dict[IssueCode, list[_Indexed]] = defaultdict(list)
        left_after: dict[IssueCode, list[_Indexed]] = defaultdict(list)
        for item in before_items:
            if item[0] not in links:
                left_before[item[1].issue_code].append(item)
        for item in after_items:
            if item[0] not in used_after:
                left_after[item[1].issue_code].append(item)

        for code, group in left_before.items():
            b_named, b_unnamed = _split_named(group)
            a_named, a_unnamed = _split_named(left_after.get(code, []))
            steps = (
                (b_named, a_unnamed),
                (b_unnamed, a_named),
                (b_unnamed, a_unnamed),
            )
            for b_side, a_side in steps:
                paired = list(zip(b_side, a_side))
                for (b_idx, _), (a_idx, _) in paired:
                    links[b_idx] = a_idx
                    used_after.add(a_idx)
                del b_side[:len(paired)]
                del a_side[:len(paired)]
            for b_idx, _ in b_named + b_unnamed:
                links[b_idx] = None

        pairs: list[MatchedPair] = []
        for b_idx, b_issue in before_items:
            a_idx = links[b_idx]
            pairs.append(MatchedPair(before=b_issue, after=after[a_idx] if a_idx is not None else None))
        for a_idx, a_issue in after_items:
            if a_idx not in used_after:
                pairs.append(MatchedPair(before=None, after=a_issue))
        return pairs
