# masm_render/arch/x86/addressing.py
"""
x86 アドレッシングパターン認識。

[base+index*stride+offset] の形をしたアドレス式を、加算ツリーの入れ子の向きに関係なく認識し、
正規化された順序で出力します。上流の逆アセンブラはバージョンにより
(reg + reg*int) + int と reg + (reg*int + int) のどちらの形も生成するため、
どちらの場合も同じ文字列になるようにします。
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from masm_render.arch.x86.literals import format_signed_offset, truncate
from masm_render.arch.x86.registers import RegisterNameResolver
from masm_render.core.expression import (
    BinaryAdd,
    BinaryMultiply,
    DirectRegister,
    Expression,
    IntegerValue,
)

logger = logging.getLogger(__name__)

# @intent:responsibility 完全に認識されたアドレッシングパターン。全ての役割が埋まった状態でのみ生成されます。
@dataclass(frozen=True)
class IndirectAddress:
    base: DirectRegister
    index: DirectRegister
    stride: IntegerValue
    offset: IntegerValue

    # @intent:responsibility 元のツリーの順序に関わらず [base+index*stride+offset] の順で出力します。
    def emit(self, register_name: RegisterNameResolver) -> str:
        text = "[" + register_name(self.base.descriptor) + "+" + register_name(self.index.descriptor)
        stride = truncate(self.stride.value, self.stride.nbits)
        if stride != 1:
            text += f"*{stride:x}"
        text += format_signed_offset(self.offset.value, self.offset.nbits)
        return text + "]"


# @intent:responsibility 2段の加算ツリーを3つの葉に展開します。形が合わなければNone。
def _flatten(expr: Expression) -> Optional[List[Expression]]:
    if not isinstance(expr, BinaryAdd):
        return None
    if isinstance(expr.lhs, BinaryAdd):
        return [expr.lhs.lhs, expr.lhs.rhs, expr.rhs]
    if isinstance(expr.rhs, BinaryAdd):
        return [expr.lhs, expr.rhs.lhs, expr.rhs.rhs]
    return None


# @intent:responsibility reg*int または int*reg の積を (レジスタ, 整数) に分解します。
def _scaled_index(expr: BinaryMultiply):
    if isinstance(expr.lhs, DirectRegister) and isinstance(expr.rhs, IntegerValue):
        return expr.lhs, expr.rhs
    if isinstance(expr.rhs, DirectRegister) and isinstance(expr.lhs, IntegerValue):
        return expr.rhs, expr.lhs
    return None


# @intent:responsibility アドレス式が [base+index*stride+offset] の形か判定します。
# @intent:post-condition 戻り値はIndirectAddress（完全）またはNone（不完全）。部分的な結果は返しません。
def match_indirect_address(address: Expression) -> Optional[IndirectAddress]:
    """
    アドレス式を解析し、ベース/インデックス/スケール/オフセットが一意に決まる場合のみ
    IndirectAddressを返します。役割の重複や、どの役割にも当てはまらない葉があればNoneです。
    スケールまたはオフセットが非対応のビット幅を持つ場合はUnsupportedWidthErrorとなります。
    """
    leaves = _flatten(address)
    if leaves is None:
        return None

    bases, offsets, indexes = [], [], []
    for leaf in leaves:
        if isinstance(leaf, DirectRegister):
            bases.append(leaf)
        elif isinstance(leaf, IntegerValue):
            offsets.append(leaf)
        elif isinstance(leaf, BinaryMultiply) and _scaled_index(leaf) is not None:
            indexes.append(_scaled_index(leaf))
        else:
            # 加算の入れ子、減算、レジスタ同士の積など
            logger.debug("Address term %r matches no addressing role", leaf)
            return None

    if len(bases) != 1 or len(offsets) != 1 or len(indexes) != 1:
        logger.debug("Ambiguous addressing roles in %r", address)
        return None

    index, stride = indexes[0]
    # 非対応のビット幅は汎用描画に戻さずエラーとする
    truncate(stride.value, stride.nbits)
    truncate(offsets[0].value, offsets[0].nbits)
    return IndirectAddress(base=bases[0], index=index, stride=stride, offset=offsets[0])
