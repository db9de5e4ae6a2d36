"""
設定管理模組
統一管理 Appium server、後台 API、賣家帳號與測試資料上限等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
支援 capabilities 結構驗證，提前發現設定錯誤。
"""

import json
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = Path(__file__).resolve().parent

SUPPORTED_PLATFORMS = ("android", "ios", "web")

# capabilities 必填欄位定義（web 由 selenium 建立，不讀 caps 檔）
_REQUIRED_CAPS = {
    "android": ["appium:deviceName", "appium:app", "platformName"],
    "ios": ["appium:deviceName", "appium:app", "platformName"],
}


class ConfigValidationError(Exception):
    """Capabilities 設定驗證失敗"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        msg = "Capabilities 驗證失敗:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


class Config:
    """框架全域設定"""

    # Appium Server
    APPIUM_HOST = os.getenv("APPIUM_HOST", "127.0.0.1")
    APPIUM_PORT = int(os.getenv("APPIUM_PORT", "4723"))

    # 超時設定 (秒)
    IMPLICIT_WAIT = int(os.getenv("IMPLICIT_WAIT", "10"))
    EXPLICIT_WAIT = int(os.getenv("EXPLICIT_WAIT", "15"))

    # 截圖
    SCREENSHOT_DIR = BASE_DIR / "screenshots"

    # 平台
    PLATFORM = os.getenv("PLATFORM", "android").lower()
    DASHBOARD_URL = os.getenv("DASHBOARD_URL", "https://www.dashboard.example.com")

    # 後台 API 與賣家帳號
    API_BASE_URL = os.getenv("API_BASE_URL", "https://api.example.com")
    API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
    SELLER_USERNAME = os.getenv("SELLER_USERNAME", "")
    SELLER_PASSWORD = os.getenv("SELLER_PASSWORD", "")

    # 價格上限（listing / selling / cost 皆不得超過）
    MAX_PRICE = 99_999_999_999

    @classmethod
    def appium_server_url(cls) -> str:
        return f"http://{cls.APPIUM_HOST}:{cls.APPIUM_PORT}"

    @classmethod
    def load_caps(cls, platform: str | None = None, validate: bool = True) -> dict:
        """
        從 JSON 檔載入 desired capabilities。

        Args:
            platform: 'android' 或 'ios'，預設讀取 Config.PLATFORM
            validate: 是否驗證必填欄位（預設 True）

        Returns:
            capabilities dict

        Raises:
            FileNotFoundError: 設定檔不存在
            ConfigValidationError: 必填欄位缺失
        """
        platform = platform or cls.PLATFORM
        caps_file = CONFIG_DIR / f"{platform}_caps.json"
        if not caps_file.exists():
            raise FileNotFoundError(f"找不到 capabilities 設定檔: {caps_file}")
        with open(caps_file, "r", encoding="utf-8") as f:
            caps = json.load(f)

        if validate:
            cls.validate_caps(caps, platform)

        return caps

    @classmethod
    def validate_caps(cls, caps: dict, platform: str) -> None:
        """
        驗證 capabilities 結構。

        Raises:
            ConfigValidationError: 必填欄位缺失時拋出
        """
        errors = [
            f"缺少必填欄位: {key}"
            for key in _REQUIRED_CAPS.get(platform, [])
            if key not in caps
        ]
        if errors:
            raise ConfigValidationError(errors)
