"""
Driver 生命週期管理

負責建立、取得、關閉 driver，確保每個測試 session 獨立。
Android / iOS 走 Appium server，Web 直接啟動本機 Chrome。

支援：
- 執行緒安全（平行測試時每個 worker 獨立 driver）
- Appium server 連線前健康檢查
- 連線失敗自動重試（指數退避）
"""

import threading
import time
import urllib.error
import urllib.request

from appium import webdriver
from appium.options.android import UiAutomator2Options
from appium.options.ios import XCUITestOptions
from selenium import webdriver as selenium_webdriver
from selenium.common.exceptions import WebDriverException

from config.config import Config
from core.exceptions import (
    DriverConnectionError,
    DriverNotInitializedError,
)
from utils.logger import logger


class DriverManager:
    """
    管理 Appium / selenium WebDriver 的建立與銷毀

    使用 thread-local storage 確保平行測試時各 worker 的 driver 互不干擾。
    """

    _local = threading.local()

    # ── Appium Server 健康檢查 ──

    @classmethod
    def health_check(cls, url: str | None = None, timeout: float = 5.0) -> bool:
        """
        檢查 Appium server 是否可連線。

        Returns:
            True = server 可用, False = 不可用
        """
        url = url or Config.appium_server_url()
        try:
            req = urllib.request.Request(f"{url}/status", method="GET")
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return resp.status == 200
        except (urllib.error.URLError, OSError, TimeoutError):
            return False

    # ── Driver 建立 ──

    @classmethod
    def create_driver(
        cls,
        platform: str | None = None,
        max_retries: int = 3,
        retry_delay: float = 2.0,
    ):
        """
        根據平台建立 driver，支援自動重試。

        Args:
            platform: 'android' / 'ios' / 'web'，預設讀取 Config.PLATFORM
            max_retries: 連線失敗時最多重試次數
            retry_delay: 首次重試等待秒數（後續指數退避）
        """
        platform = platform or Config.PLATFORM
        if platform == "web":
            factory, url = cls._web_factory(), Config.DASHBOARD_URL
        elif platform in ("android", "ios"):
            factory, url = cls._appium_factory(platform), Config.appium_server_url()
            if not cls.health_check(url):
                logger.warning(f"Appium server 健康檢查失敗: {url}，仍嘗試連線...")
        else:
            raise ValueError(f"不支援的平台: {platform}")

        last_error: Exception | None = None
        for attempt in range(max_retries):
            try:
                drv = factory()
                break
            except WebDriverException as e:
                last_error = e
                if attempt < max_retries - 1:
                    wait = retry_delay * (2 ** attempt)
                    logger.warning(
                        f"Driver 連線失敗 (第 {attempt + 1} 次)，"
                        f"{wait:.1f}s 後重試: {e}"
                    )
                    time.sleep(wait)
        else:
            raise DriverConnectionError(url, last_error)

        drv.implicitly_wait(Config.IMPLICIT_WAIT)
        if platform == "web":
            drv.get(Config.DASHBOARD_URL)

        cls._local.driver = drv
        logger.info(f"Driver 已建立: {platform} -> {url}")
        return drv

    @staticmethod
    def _appium_factory(platform: str):
        caps = Config.load_caps(platform)
        options_cls = UiAutomator2Options if platform == "android" else XCUITestOptions
        options = options_cls().load_capabilities(caps)
        url = Config.appium_server_url()
        return lambda: webdriver.Remote(command_executor=url, options=options)

    @staticmethod
    def _web_factory():
        options = selenium_webdriver.ChromeOptions()
        options.add_argument("--window-size=1920,1080")
        return lambda: selenium_webdriver.Chrome(options=options)

    @classmethod
    def get_driver(cls):
        """取得當前執行緒的 driver 實例"""
        drv = getattr(cls._local, "driver", None)
        if drv is None:
            raise DriverNotInitializedError()
        return drv

    @classmethod
    def quit_driver(cls) -> None:
        """安全關閉當前執行緒的 driver"""
        drv = getattr(cls._local, "driver", None)
        if drv is not None:
            drv.quit()
            cls._local.driver = None
            logger.info("Driver 已關閉")
