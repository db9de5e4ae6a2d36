"""
core — 框架核心

統一匯出核心元件，方便外部 import。

用法：
    from core import BasePage, DriverManager, ScenarioContext, env
    from core import ProductMismatchError, RetryExhaustedError
"""

from core.exceptions import (
    BackendError,
    BackendRequestError,
    ConfigError,
    DataFileNotFoundError,
    DriverConnectionError,
    DriverError,
    DriverNotInitializedError,
    ElementNotClickableError,
    ElementNotFoundError,
    ElementNotVisibleError,
    InvalidConfigError,
    InvalidStockError,
    PageError,
    ProductMismatchError,
    ProductNotFoundError,
    ReferenceDataError,
    RetryExhaustedError,
    SellerAutomationError,
    TestDataError,
)
from core.env_manager import env
from core.base_page import BasePage
from core.driver_manager import DriverManager
from core.scenario import ScenarioContext

__all__ = [
    # Driver / Page
    "DriverManager",
    "BasePage",
    # Infrastructure
    "env",
    "ScenarioContext",
    # Exceptions
    "SellerAutomationError",
    "DriverError",
    "DriverNotInitializedError",
    "DriverConnectionError",
    "PageError",
    "ElementNotFoundError",
    "ElementNotClickableError",
    "ElementNotVisibleError",
    "ConfigError",
    "InvalidConfigError",
    "TestDataError",
    "DataFileNotFoundError",
    "InvalidStockError",
    "BackendError",
    "BackendRequestError",
    "ReferenceDataError",
    "ProductNotFoundError",
    "RetryExhaustedError",
    "ProductMismatchError",
]
