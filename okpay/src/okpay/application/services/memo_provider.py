"""
Session memo provider.
"""

import random
from typing import Optional

from okpay.domain.services.i_key_value_store import IKeyValueStore
from okpay.domain.value_objects.memo import Memo, generate_memo
from shared.reporter import SystemReporter

DEFAULT_MEMO_KEY = "okpay_memo"


class MemoProvider:
    """
    One memo per session.

    The memo is read from the session store on first use, generated and
    written back when absent or malformed, then reused for every
    transfer of the session.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        key: str = DEFAULT_MEMO_KEY,
        rng: Optional[random.Random] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        self.store = store
        self.key = key
        self.rng = rng
        self.reporter = reporter or SystemReporter(name="memo", verbose=1)
        self._memo: Optional[Memo] = None

    def get_or_create(self) -> Memo:
        if self._memo is not None:
            return self._memo

        stored = self.store.get(self.key)
        if stored is not None and Memo.is_valid(stored):
            self._memo = Memo(stored)
            return self._memo

        if stored is not None:
            self.reporter.warning(
                f"Replacing malformed stored memo {stored!r}", context="Memo"
            )

        self._memo = generate_memo(self.rng)
        self.store.set(self.key, self._memo.value)
        self.reporter.info(f"Generated memo {self._memo}", context="Memo")
        return self._memo
