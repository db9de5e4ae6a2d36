"""
synthesis — 預期商品資料的產生

所有產生器都吃同一個 random.Random，給定 seed 就能重現整份資料。
"""

from synthesis.pricing import PriceInvariantGenerator, PriceTriad
from synthesis.product_info import ProductInformationSynthesizer, StoreContext, SynthesisConfig
from synthesis.stock import BranchStockAllocator
from synthesis.variation import VariationMapGenerator, split_counts

__all__ = [
    "BranchStockAllocator",
    "PriceInvariantGenerator",
    "PriceTriad",
    "ProductInformationSynthesizer",
    "StoreContext",
    "SynthesisConfig",
    "VariationMapGenerator",
    "split_counts",
]
