from datetime import timedelta
from typing import List, Sequence

# Two top scores submitted this close together belong to the same round
TIE_WINDOW = timedelta(milliseconds=20000)
TOP_N = 2


def select_winners(top: Sequence) -> list:
    """Pick the winner(s) from the store's top-2 scored records.

    ``top`` is ordered by score then timestamp, both descending. Records need
    ``score`` and ``timestamp`` attributes.

    - no records: nobody wins
    - one record: it wins
    - two records within TIE_WINDOW (inclusive): both, ranked by score then
      most recent
    - two records further apart: only the first one
    """
    if not top:
        return []
    if len(top) == 1:
        return [top[0]]
    first, second = top[0], top[1]
    if abs(first.timestamp - second.timestamp) <= TIE_WINDOW:
        return sorted((first, second), key=lambda r: (r.score, r.timestamp), reverse=True)
    return [first]


class WinnerSelector:
    def __init__(self, store):
        self.store = store

    def winners(self) -> List[dict]:
        records = self.store.query_top_by_score(TOP_N)
        return [r.to_dict() for r in select_winners(records)]
