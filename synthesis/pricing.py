"""
價格三元組產生器

保證 listing ≥ selling ≥ cost ≥ 0，且都小於 max_price。
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from config.config import Config


@dataclass(frozen=True)
class PriceTriad:
    listing: int
    selling: int
    cost: int


class PriceInvariantGenerator:

    def __init__(self, rng: random.Random):
        self.rng = rng

    def generate(
        self,
        max_price: int = Config.MAX_PRICE,
        no_discount: bool = False,
        no_cost: bool = False,
    ) -> PriceTriad:
        """
        Args:
            max_price: listing 的上限（不含）
            no_discount: True 時 selling == listing
            no_cost: True 時 cost == 0

        Raises:
            ValueError: max_price < 1
        """
        if max_price < 1:
            raise ValueError(f"max_price 必須 ≥ 1，實際 {max_price}")
        listing = self.rng.randrange(max_price)
        # 上限取 max(x, 1)，避免 x == 0 時範圍為空
        selling = listing if no_discount else self.rng.randrange(max(listing, 1))
        cost = 0 if no_cost else self.rng.randrange(max(selling, 1))
        return PriceTriad(listing, selling, cost)
