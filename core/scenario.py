"""
測試情境 (Scenario Context)

一個測試案例從「合成預期商品」到「驗證後台資料」之間需要傳遞的東西都放在這裡：
seed、亂數來源、預期商品、建立後解析出來的商品 id。
每個測試各自建立一個，不共用任何全域狀態。

失敗時 log 裡的 seed 可以用 pytest --seed <seed> 重現同一份資料。
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from models.product import ProductModel
from utils.logger import logger

if TYPE_CHECKING:
    from synthesis.product_info import StoreContext


@dataclass
class ScenarioContext:
    seed: int
    rng: random.Random = field(repr=False)
    store: StoreContext | None = None
    expected: ProductModel | None = None
    product_id: int = 0

    @classmethod
    def new(cls, seed: int | None = None) -> ScenarioContext:
        seed = int(time.time() * 1000) if seed is None else seed
        logger.info(f"[Scenario] seed = {seed}")
        return cls(seed=seed, rng=random.Random(seed))
