"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# @intent:data_structure アドレスとラベル名をマッピングする読み取り専用辞書の型エイリアス。
# Config, Unparser, Printerなど複数のレイヤーで共通して使用されます。
LabelMap = Mapping[int, str]

# @intent:responsibility ラベル辞書を読み取り専用のビューに変換します。
# @intent:rationale ラベルマップはプロセス開始時に一度だけ構築され、以降は描画中に変更されてはなりません。
def freeze_labels(labels: Optional[Dict[int, str]] = None) -> LabelMap:
    """
    ラベル辞書のコピーを読み取り専用のマッピングとして返します。
    Noneの場合は空のマッピングを返します。
    """
    return MappingProxyType(dict(labels or {}))
