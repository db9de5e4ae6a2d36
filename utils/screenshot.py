"""
截圖工具
測試失敗時自動截圖，方便 debug。
"""

import re
from datetime import datetime

from config.config import Config
from utils.logger import logger


def _safe_name(name: str) -> str:
    """pytest node id 會帶 '::' 與參數括號，轉成可當檔名的字串"""
    return re.sub(r"[^\w\-]+", "_", name).strip("_") or "screenshot"


def take_screenshot(driver, name: str) -> str:
    """
    擷取螢幕截圖並儲存到 screenshots 目錄。

    Args:
        driver: Appium / selenium driver 實例
        name: 截圖名稱（可直接傳 pytest node id）

    Returns:
        截圖檔案的完整路徑
    """
    Config.SCREENSHOT_DIR.mkdir(exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = Config.SCREENSHOT_DIR / f"{_safe_name(name)}_{timestamp}.png"
    driver.save_screenshot(str(filepath))
    logger.info(f"截圖已儲存: {filepath}")
    return str(filepath)
