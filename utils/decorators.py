"""
自訂 Decorators
"""

import functools
import time

from utils.logger import logger


def timer(func):
    """
    記錄函式執行時間。

    用法：
        @timer
        def verify(self, product_id, expected): ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start
        logger.info(f"[計時] {func.__name__} 耗時 {elapsed:.2f} 秒")
        return result
    return wrapper
