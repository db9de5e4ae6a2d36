"""
使用者方案 (User Features)

賣家訂閱的方案決定商品能上架到哪些銷售通路：
    GoWEB → 網站   GoAPP → App   GoPOS → 門市   GoSOCIAL → 社群

通路判斷：找到第一個「名稱相符或 packageId 相符」的方案，
且 expiredPackageDate（秒）仍晚於現在。
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

from api.login import SellerSession


class PackageId(Enum):
    GoOMNI = 5
    GoWEB = 6
    GoAPP = 7
    GoPOS = 8
    GoLEAD = 9
    GoSOCIAL = 10


@dataclass
class UserPackage:
    package_name: str | None
    package_id: int
    expired_package_date: int  # epoch 秒

    @classmethod
    def from_dict(cls, data: dict) -> UserPackage:
        feature = data.get("userFeature") or {}
        return cls(
            package_name=data.get("packageName"),
            package_id=int(feature.get("packageId") or 0),
            expired_package_date=int(feature.get("expiredPackageDate") or 0),
        )


def has_active_package(packages: list[UserPackage], package: PackageId, now_ms: int | None = None) -> bool:
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    match = next(
        (p for p in packages if p.package_name == package.name or p.package_id == package.value),
        None,
    )
    return match is not None and match.expired_package_date * 1000 > now_ms


@dataclass(frozen=True)
class SalesChannels:
    """賣家可用的銷售通路"""
    web: bool = False
    app: bool = False
    in_store: bool = False
    social: bool = False

    @classmethod
    def from_packages(cls, packages: list[UserPackage], now_ms: int | None = None) -> SalesChannels:
        return cls(
            web=has_active_package(packages, PackageId.GoWEB, now_ms),
            app=has_active_package(packages, PackageId.GoAPP, now_ms),
            in_store=has_active_package(packages, PackageId.GoPOS, now_ms),
            social=has_active_package(packages, PackageId.GoSOCIAL, now_ms),
        )


class UserFeatureApi:

    def __init__(self, session: SellerSession):
        self.session = session

    def get_user_features(self) -> list[UserPackage]:
        rows = self.session.client.get_json(
            f"/beehiveservices/api/user-features/user-ids/{self.session.user_id}?langKey="
        )
        return [UserPackage.from_dict(r) for r in rows]

    def get_sales_channels(self) -> SalesChannels:
        return SalesChannels.from_packages(self.get_user_features())
