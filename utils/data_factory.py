"""
測試資料工廠
產生商品相關的命名與隨機值。

命名規則固定，語系、庫存模式、有無變化款式都編進名稱裡，
再加上時間戳避免重複執行時撞名。
隨機值一律來自建構時給的 random.Random，同一個 seed 可以重現同一份資料。
"""

import random
from datetime import datetime
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


class DataFactory:
    """產生商品測試資料；rng 與 clock 都可注入"""

    def __init__(self, rng: random.Random, clock: Callable[[], datetime] = datetime.now):
        self.rng = rng
        self.clock = clock

    # ── 時間戳 ──

    def timestamp(self) -> str:
        return self.clock().strftime("%d/%m %H:%M:%S")

    def epoch_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    # ── 隨機值 ──

    def random_bool(self) -> bool:
        return self.rng.random() < 0.5

    def random_int(self, min_val: int = 0, max_val: int = 100) -> int:
        return self.rng.randint(min_val, max_val)

    def random_choice(self, items: Sequence[T]) -> T:
        return self.rng.choice(items)

    # ── 商品命名 ──

    def product_name(self, language: str, has_model: bool, lot: bool, imei: bool) -> str:
        return "[{}][{}][{}] Product name - {} - {}".format(
            language,
            "Variation" if has_model else "Without variation",
            "LOT" if lot else "NoLOT",
            "IMEI" if imei else "Normal",
            self.timestamp(),
        )

    def product_description(self, language: str) -> str:
        return f"[{language}] Product description {self.timestamp()}"

    def seo_fields(self, language: str) -> dict[str, str]:
        epoch = self.epoch_ms()
        return {
            "seo_title": f"[{language}] SEO Title - {epoch}",
            "seo_description": f"[{language}] SEO Description - {epoch}",
            "seo_keywords": f"[{language}] SEO Keyword - {epoch}",
            "seo_url": f"{language}-seo-url-{epoch}",
        }

    def version_name(self, language: str, value: str) -> str:
        return f"[{language}][{value}] Version name {self.timestamp()}"

    def version_description(self, language: str, value: str) -> str:
        return f"[{language}][{value}] Version description {self.timestamp()}"

    def sku(self, value: str, branch_id: int) -> str:
        """款式 SKU 以合成值開頭；value 為空時是商品層級的 SKU"""
        prefix = f"{value}_" if value else ""
        return f"{prefix}SKU_{branch_id}_{self.epoch_ms()}"

    def barcode(self) -> str:
        return f"{self.epoch_ms()}{self.rng.randrange(10_000):04d}"
