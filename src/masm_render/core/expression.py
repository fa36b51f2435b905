# masm_render/core/expression.py
"""
オペランド式ツリーの不変データ構造

このモジュールは、逆アセンブラ/リフターが生成する1オペランド分の式ツリーを
構成するノード型を定義します。ツリーは命令が排他的に所有し、共有や循環はありません。
"""
from dataclasses import dataclass
from typing import Hashable, Optional, Union


# --- Operand Types ---

# @intent:responsibility 整数型（メモリ参照のアクセスサイズ）を表します。
@dataclass(frozen=True)
class IntegerType:
    nbits: int

# @intent:responsibility 浮動小数点型を表します。
@dataclass(frozen=True)
class FloatType:
    nbits: int

# @intent:responsibility ベクター型（要素型 x 要素数）を表します。
@dataclass(frozen=True)
class VectorType:
    count: int
    element: "OperandType"

OperandType = Union[IntegerType, FloatType, VectorType]


# --- Expression Nodes ---

# @intent:responsibility 加算ノード。
@dataclass(frozen=True) # 不変データ構造
class BinaryAdd:
    lhs: "Expression"
    rhs: "Expression"

# @intent:responsibility 減算ノード。
@dataclass(frozen=True)
class BinarySubtract:
    lhs: "Expression"
    rhs: "Expression"

# @intent:responsibility 乗算ノード（主にインデックス*スケール）。
@dataclass(frozen=True)
class BinaryMultiply:
    lhs: "Expression"
    rhs: "Expression"

# @intent:responsibility メモリ参照ノード。アドレス式とオプションのセグメント式を保持します。
@dataclass(frozen=True)
class MemoryReference:
    """
    メモリ参照（[...]）を表すデータクラス。
    type はアクセスサイズで、サイズキーワード（byte ptr等）の表示に用いられます。
    """
    address: "Expression"
    segment: Optional["Expression"] = None
    type: Optional[OperandType] = None

# @intent:responsibility レジスタ直接参照ノード。descriptorの名前解決は外部のリゾルバに委譲します。
@dataclass(frozen=True)
class DirectRegister:
    descriptor: Hashable

# @intent:responsibility 番号のみを持つ間接レジスタノード（レガシー経路）。
@dataclass(frozen=True)
class IndirectRegister:
    index: int

# @intent:responsibility 固定ビット幅の整数値ノード。
@dataclass(frozen=True)
class IntegerValue:
    """
    生のビットパターンと宣言されたビット幅（8/16/32/64）を保持するデータクラス。
    """
    value: int
    nbits: int

Expression = Union[
    BinaryAdd,
    BinarySubtract,
    BinaryMultiply,
    MemoryReference,
    DirectRegister,
    IndirectRegister,
    IntegerValue,
]
