"""
商店設定 API：分店、語系、稅率
"""

from __future__ import annotations

from dataclasses import dataclass

from api.login import SellerSession
from core.exceptions import ReferenceDataError
from utils.logger import logger


@dataclass
class Branch:
    id: int
    name: str
    active: bool = True


@dataclass
class VATOption:
    id: int
    name: str


class StoreSettingApi:

    def __init__(self, session: SellerSession):
        self.session = session

    @property
    def _client(self):
        return self.session.client

    def get_branch_list(self) -> list[Branch]:
        rows = self._client.get_json(
            f"/storeservice/api/store-branch/full?storeId={self.session.store_id}&page=0&size=100"
        )
        return [
            Branch(id=int(r["id"]), name=r["name"], active=r.get("branchStatus") == "ACTIVE")
            for r in rows
        ]

    def get_active_branches(self) -> list[Branch]:
        """
        Raises:
            ReferenceDataError: 沒有任何啟用中的分店
        """
        branches = [b for b in self.get_branch_list() if b.active]
        if not branches:
            raise ReferenceDataError("啟用中的分店")
        logger.debug(f"[Setting] 啟用中分店: {[b.id for b in branches]}")
        return branches

    def get_language_codes(self) -> list[str]:
        rows = self._client.get_json(
            f"/storeservice/api/store-language/store/{self.session.store_id}?hasInitial=true"
        )
        return [r["langCode"] for r in rows]

    def get_default_language(self) -> str:
        """
        Raises:
            ReferenceDataError: 商店沒有設定任何語系
        """
        codes = self.get_language_codes()
        if not codes:
            raise ReferenceDataError("商店預設語系")
        return codes[0]

    def get_vat_list(self) -> list[VATOption]:
        """
        Raises:
            ReferenceDataError: 沒有任何稅率選項
        """
        rows = self._client.get_json(f"/storeservice/api/tax-settings/store/{self.session.store_id}")
        options = [VATOption(id=int(r["id"]), name=r["name"]) for r in rows]
        if not options:
            raise ReferenceDataError("稅率選項")
        return options
