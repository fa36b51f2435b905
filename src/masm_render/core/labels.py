# masm_render/core/labels.py
"""
アドレスからラベル名への読み取り専用の検索。
"""
from typing import Optional

from masm_render.common.types import LabelMap

# @intent:responsibility アドレスに対応するラベル名を返します。見つからなければNone。
# @intent:pre-condition アドレス0は「値なし」として予約されており、検索されません。
def resolve_label(address: int, labels: Optional[LabelMap]) -> Optional[str]:
    if not address or labels is None:
        return None
    return labels.get(address)
