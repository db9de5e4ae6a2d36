from utils.logger import log_step, logger
from utils.screenshot import take_screenshot
from utils.wait_helper import poll_until, retry, retry_until
from utils.data_loader import get_test_ids, load_data
from utils.data_factory import DataFactory
from utils.decorators import timer

__all__ = [
    "logger",
    "log_step",
    "take_screenshot",
    "retry_until",
    "poll_until",
    "retry",
    "load_data",
    "get_test_ids",
    "DataFactory",
    "timer",
]
