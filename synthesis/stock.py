"""
分店庫存分配

把呼叫端給的庫存陣列依「啟用中分店」的順序對應上去：
    第 i 間分店 → 0（lot 管理）/ supplied[i] / 0（陣列不夠長）

輸出一定涵蓋所有啟用中分店，不會出現停用分店。
"""

from __future__ import annotations

from core.exceptions import InvalidStockError


class BranchStockAllocator:

    @staticmethod
    def allocate(
        active_branch_ids: list[int],
        supplied_stock: list[int],
        lot_available: bool = False,
    ) -> dict[int, int]:
        """
        Raises:
            InvalidStockError: supplied_stock 含負數
        """
        for index, quantity in enumerate(supplied_stock):
            if quantity < 0:
                raise InvalidStockError(index, quantity)
        return {
            branch_id: 0 if lot_available or i >= len(supplied_stock) else supplied_stock[i]
            for i, branch_id in enumerate(active_branch_ids)
        }

    @staticmethod
    def increase(
        active_branch_ids: list[int],
        base_stock: list[int],
        step: int,
    ) -> dict[int, int]:
        """
        批次增加庫存：第 i 間分店為 base[i] + i * step，讓每間分店的數量都不同。

        Raises:
            InvalidStockError: 結果為負數
        """
        result = {}
        for i, branch_id in enumerate(active_branch_ids):
            quantity = (base_stock[i] if i < len(base_stock) else 0) + i * step
            if quantity < 0:
                raise InvalidStockError(i, quantity)
            result[branch_id] = quantity
        return result

    @staticmethod
    def serial_numbers(
        branch_stock: dict[int, int],
        branch_names: dict[int, str],
        variation: str = "",
    ) -> dict[int, list[str]]:
        """
        IMEI 商品的序號：每間分店 quantity 筆，格式 "{variation_}{branchName}_{index}"。

        同一商品內不同分店名稱不同，序號自然不重複。
        """
        prefix = f"{variation}_" if variation else ""
        return {
            branch_id: [f"{prefix}{branch_names[branch_id]}_{index}" for index in range(quantity)]
            for branch_id, quantity in branch_stock.items()
        }
