"""
變化群組 (Variation Groups)

一個商品最多兩個變化群組（例如 顏色 / 尺寸），
每個群組是「名稱 → 有序且不重複的值」。

兩種表示法可以互轉：
    群組表示：{"en_var1": ["en_var1_1", "en_var1_2"], "en_var2": ["en_var2_1"]}
    合成表示：group name  "en_var1|en_var2"
              composite   ["en_var1_1|en_var2_1", "en_var1_2|en_var2_1"]

合成值永遠依照群組建立時的順序串接，
from_composite(group_name, to_composite()) 會還原出相同的群組。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from math import prod

SEPARATOR = "|"


def localize(text: str, default_language: str, language: str) -> str:
    """
    把每一段開頭的預設語系代碼換成 language。

    "en_var1_2|en_var2_1" → "vi_var1_2|vi_var2_1"
    """
    return SEPARATOR.join(
        language + part[len(default_language):] if part.startswith(default_language) else part
        for part in text.split(SEPARATOR)
    )


@dataclass
class VariationGroups:
    """有序的變化群組；相等比較不看群組順序，但看群組內值的順序"""

    groups: dict[str, list[str]] = field(default_factory=dict)

    @property
    def names(self) -> list[str]:
        return list(self.groups)

    @property
    def group_name(self) -> str:
        """群組名稱以 | 串接，例如 "en_var1|en_var2" """
        return SEPARATOR.join(self.groups)

    @property
    def sizes(self) -> list[int]:
        return [len(values) for values in self.groups.values()]

    @property
    def model_count(self) -> int:
        """笛卡兒積的組合數"""
        return prod(self.sizes) if self.groups else 0

    def to_composite(self) -> list[str]:
        """
        產生所有組合的合成值。

        第一個群組在外層，所以 ["a1","a2"] x ["b1"] → ["a1|b1", "a2|b1"]。
        """
        if not self.groups:
            return []
        return [SEPARATOR.join(combo) for combo in product(*self.groups.values())]

    @classmethod
    def from_composite(cls, group_name: str, composite_values: list[str]) -> VariationGroups:
        """
        由群組名稱與合成值反推群組。

        每個群組的值依第一次出現的順序收集並去重。

        Raises:
            ValueError: 合成值的段數與群組數不符
        """
        names = group_name.split(SEPARATOR)
        groups: dict[str, list[str]] = {name: [] for name in names}
        for composite in composite_values:
            parts = composite.split(SEPARATOR)
            if len(parts) != len(names):
                raise ValueError(
                    f"合成值 '{composite}' 有 {len(parts)} 段，但群組 '{group_name}' 有 {len(names)} 個"
                )
            for name, value in zip(names, parts):
                if value not in groups[name]:
                    groups[name].append(value)
        return cls(groups)

    def localized(self, default_language: str, language: str) -> VariationGroups:
        """把名稱與值開頭的語系代碼換成另一個語系"""
        return VariationGroups({
            localize(name, default_language, language): [
                localize(v, default_language, language) for v in values
            ]
            for name, values in self.groups.items()
        })

    def __len__(self) -> int:
        return len(self.groups)
