"""
api — 賣家後台 REST 服務

用法：
    from api import SellerSession, StoreSettingApi, UserFeatureApi, ProductApi

    session = SellerSession.login(ApiClient(), username, password)
    branches = StoreSettingApi(session).get_active_branches()
"""

from api.login import SellerSession
from api.product import ProductApi
from api.setting import Branch, StoreSettingApi, VATOption
from api.user_feature import PackageId, SalesChannels, UserFeatureApi, UserPackage

__all__ = [
    "Branch",
    "PackageId",
    "ProductApi",
    "SalesChannels",
    "SellerSession",
    "StoreSettingApi",
    "UserFeatureApi",
    "UserPackage",
    "VATOption",
]
