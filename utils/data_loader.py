"""
測試資料載入器
支援從 JSON / YAML 載入測試資料，搭配 pytest.mark.parametrize 做資料驅動測試。

用法：
    from utils.data_loader import load_data, get_test_ids

    cases = load_data("product_scenarios.yaml")

    @pytest.mark.parametrize("case", cases, ids=get_test_ids(cases))
    def test_create_product(case):
        ...
"""

import json
from pathlib import Path

import yaml

from core.exceptions import DataFileNotFoundError

DATA_DIR = Path(__file__).resolve().parent.parent / "test_data"


def _resolve(filename: str) -> Path:
    filepath = DATA_DIR / filename
    if not filepath.exists():
        raise DataFileNotFoundError(str(filepath))
    return filepath


def load_json(filename: str) -> list[dict]:
    """從 JSON 檔載入測試資料"""
    with open(_resolve(filename), "r", encoding="utf-8") as f:
        return json.load(f)


def load_yaml(filename: str) -> list[dict]:
    """
    從 YAML 檔載入測試資料。

    檔案可以是 case 清單，或是帶 cases 欄位的 dict。
    """
    with open(_resolve(filename), "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and "cases" in data:
        return data["cases"]
    return [data]


def load_data(filename: str) -> list[dict]:
    """
    自動偵測檔案格式並載入測試資料。

    支援副檔名: .json, .yaml, .yml
    """
    suffix = Path(filename).suffix.lower()
    loaders = {
        ".json": load_json,
        ".yaml": load_yaml,
        ".yml": load_yaml,
    }
    loader = loaders.get(suffix)
    if loader is None:
        raise ValueError(
            f"不支援的檔案格式: {suffix} "
            f"(支援: {', '.join(loaders.keys())})"
        )
    return loader(filename)


def get_test_ids(data: list[dict], key: str = "case_id") -> list[str]:
    """從測試資料中提取 case_id 作為 pytest 的 test ID"""
    return [item.get(key, str(i)) for i, item in enumerate(data)]
