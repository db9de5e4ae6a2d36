"""
變化群組產生器

隨機的只有「數量」：群組數與總款式數。
群組名稱與值都由語系與索引決定（索引從 1 開始）：
    群組名稱  "{lang}_var{i}"
    群組值    "{lang}_var{i}_{j}"
"""

from __future__ import annotations

import random

from models.variation import VariationGroups
from utils.logger import logger

MAX_GROUPS = 2
MAX_VARIANTS_ONE_GROUP = 5
MAX_VARIANTS_TWO_GROUPS = 10
SPLIT_DIVISORS = range(2, 6)


def split_counts(total: int, group_count: int) -> list[int]:
    """
    把總款式數拆成每個群組的值數量。

    兩個群組時取 [2, 5] 中最小能整除 total 的 a，回傳 [a, total // a]；
    都不能整除（例如 1、7）時回傳 [1, total]。
    """
    if group_count == 1:
        return [total]
    factor = next((a for a in SPLIT_DIVISORS if total % a == 0), 1)
    return [factor, total // factor]


class VariationMapGenerator:
    """依給定的亂數來源產生 1 ~ 2 個變化群組"""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def generate(self, language: str) -> VariationGroups:
        group_count = self.rng.randint(1, MAX_GROUPS)
        upper = MAX_VARIANTS_ONE_GROUP if group_count == 1 else MAX_VARIANTS_TWO_GROUPS
        total = self.rng.randint(1, upper)
        sizes = split_counts(total, group_count)

        groups = VariationGroups({
            f"{language}_var{i}": [f"{language}_var{i}_{j}" for j in range(1, size + 1)]
            for i, size in enumerate(sizes, 1)
        })
        logger.debug(f"[Variation] 群組數 {group_count}，總款式 {total}，拆分 {sizes}")
        return groups

    @staticmethod
    def to_groups(group_name: str, composite_values: list[str]) -> VariationGroups:
        """由 "A|B" 群組名稱與 "v1|v2" 合成值反推群組"""
        return VariationGroups.from_composite(group_name, composite_values)
