"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 SellerAutomationError)，
也可以精準 catch 子類別 (如 ReferenceDataError)。

Exception 樹：
    SellerAutomationError
    ├── DriverError
    │   ├── DriverNotInitializedError
    │   └── DriverConnectionError
    ├── PageError
    │   ├── ElementNotFoundError
    │   ├── ElementNotClickableError
    │   └── ElementNotVisibleError
    ├── ConfigError
    │   └── InvalidConfigError
    ├── TestDataError
    │   ├── DataFileNotFoundError
    │   └── InvalidStockError
    ├── BackendError
    │   ├── BackendRequestError
    │   ├── ReferenceDataError
    │   └── ProductNotFoundError
    └── RetryExhaustedError

驗證不一致不走這棵樹：ProductMismatchError 繼承 AssertionError，
讓 pytest 直接把它當成測試失敗。
"""


class SellerAutomationError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Driver 相關 ──

class DriverError(SellerAutomationError):
    """Driver 相關錯誤"""


class DriverNotInitializedError(DriverError):
    """Driver 尚未初始化就被使用"""

    def __init__(self, message: str = "Driver 尚未建立，請先呼叫 create_driver()"):
        super().__init__(message)


class DriverConnectionError(DriverError):
    """無法連接到 Appium Server / 瀏覽器"""

    def __init__(self, url: str = "", original: Exception | None = None):
        self.original = original
        msg = f"無法建立 driver 連線: {url}"
        if original:
            msg += f" ({type(original).__name__}: {original})"
        super().__init__(msg, context={"url": url})


# ── Page / Element 相關 ──

class PageError(SellerAutomationError):
    """頁面操作相關錯誤"""


class ElementNotFoundError(PageError):
    """找不到指定元素"""

    def __init__(self, locator: tuple = (), timeout: int = 0):
        msg = f"找不到元素: {locator}"
        if timeout:
            msg += f" (等待 {timeout}s)"
        super().__init__(msg, context={"locator": locator, "timeout": timeout})


class ElementNotClickableError(PageError):
    """元素無法點擊"""

    def __init__(self, locator: tuple = ()):
        super().__init__(f"元素無法點擊: {locator}", context={"locator": locator})


class ElementNotVisibleError(PageError):
    """元素不可見"""

    def __init__(self, locator: tuple = ()):
        super().__init__(f"元素不可見: {locator}", context={"locator": locator})


# ── Config 相關 ──

class ConfigError(SellerAutomationError):
    """設定相關錯誤"""


class InvalidConfigError(ConfigError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})


# ── Test Data 相關 ──

class TestDataError(SellerAutomationError):
    """測試資料相關錯誤"""

    __test__ = False  # 避免 pytest 把它當成測試類別收集


class DataFileNotFoundError(TestDataError):
    """找不到測試資料檔案"""

    def __init__(self, path: str = ""):
        super().__init__(f"找不到測試資料: {path}", context={"path": path})


class InvalidStockError(TestDataError):
    """分店庫存數量不合法（負數）"""

    def __init__(self, index: int, quantity: int):
        super().__init__(
            f"分店庫存不可為負數: index={index}, quantity={quantity}",
            context={"index": index, "quantity": quantity},
        )


# ── Backend 相關 ──

class BackendError(SellerAutomationError):
    """後台 API 相關錯誤"""


class BackendRequestError(BackendError):
    """後台 API 回傳非預期狀態碼"""

    def __init__(self, method: str = "", url: str = "", status: int = 0, body: str = ""):
        super().__init__(
            f"[API] {method} {url} 回傳 {status}: {body[:200]}",
            context={"method": method, "url": url, "status": status},
        )
        self.status = status


class ReferenceDataError(BackendError):
    """必要的參考資料不存在（沒有啟用中的分店、沒有稅率選項...）"""

    def __init__(self, what: str = ""):
        super().__init__(f"缺少必要的參考資料: {what}", context={"what": what})


class ProductNotFoundError(BackendError):
    """依名稱找不到商品"""

    def __init__(self, name: str = ""):
        super().__init__(f"找不到商品: {name}", context={"name": name})


# ── Polling 相關 ──

class RetryExhaustedError(SellerAutomationError):
    """輪詢次數用盡，條件仍未成立"""

    def __init__(self, message: str = "", attempts: int = 0):
        self.attempts = attempts
        super().__init__(
            f"{message} (已嘗試 {attempts} 次)" if attempts else message,
            context={"attempts": attempts},
        )


# ── 驗證結果 ──

class ProductMismatchError(AssertionError):
    """預期商品與後台實際資料不一致"""

    def __init__(self, product_id: int, messages: list[str]):
        self.product_id = product_id
        self.messages = messages
        summary = f"[ProductId: {product_id}] {len(messages)} 項欄位不一致\n"
        summary += "".join(f"  {i}. {msg}\n" for i, msg in enumerate(messages, 1))
        super().__init__(summary)
