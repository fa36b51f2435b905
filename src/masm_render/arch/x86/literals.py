# masm_render/arch/x86/literals.py
"""
x86 整数リテラルの書式化。

固定ビット幅の値を2の補数として符号付き16進表記に変換し、
32/64ビット値ではラベル名への置換を試みます。
"""
import logging
from typing import Optional, Tuple

from masm_render.common.errors import UnsupportedWidthError
from masm_render.common.types import LabelMap
from masm_render.core.labels import resolve_label

logger = logging.getLogger(__name__)

SUPPORTED_WIDTHS = (8, 16, 32, 64)
# ラベル置換の対象となるビット幅（アドレスになり得る幅）
LABELED_WIDTHS = (32, 64)


# @intent:responsibility ビット幅を検証し、その幅のマスクを返します。
def _mask_for(nbits: int) -> int:
    if nbits not in SUPPORTED_WIDTHS:
        logger.critical("Unsupported integer width: %r", nbits)
        raise UnsupportedWidthError(f"Unsupported integer width: {nbits}")
    return (1 << nbits) - 1


# @intent:responsibility 値を宣言されたビット幅に切り詰めます。非対応の幅はエラーとなります。
def truncate(value: int, nbits: int) -> int:
    return value & _mask_for(nbits)


# @intent:responsibility 値を符号と絶対値に分解します。
# @intent:note 符号ビットが立っていても残りのビットが全て0の値（例: 8bitの0x80）は正として扱います。
def split_sign(value: int, nbits: int) -> Tuple[bool, int]:
    """
    (負かどうか, 絶対値) のタプルを返します。
    負の場合の絶対値は、同じ幅に切り詰めた2の補数の否定です。
    """
    mask = _mask_for(nbits)
    v = value & mask
    sign_bit = 1 << (nbits - 1)
    if (v & sign_bit) and (v & (sign_bit - 1)):
        return True, (-v) & mask
    return False, v


# @intent:responsibility 整数リテラルを "0x.." / "-0x.." またはラベル名に変換します。
def format_integer(value: int, nbits: int, labels: Optional[LabelMap] = None) -> str:
    """
    固定ビット幅の整数値をアセンブラ表記の文字列に変換します。

    32/64ビットの値がラベルマップに存在する場合はラベル名をそのまま返し、
    16進表記や符号処理は行いません。
    """
    if nbits in LABELED_WIDTHS:
        label = resolve_label(value & _mask_for(nbits), labels)
        if label:
            logger.debug("Substituted label %s for %#x", label, value)
            return label
    negative, magnitude = split_sign(value, nbits)
    if negative:
        return f"-{magnitude:#x}"
    return f"{magnitude:#x}"


# @intent:responsibility アドレス式のオフセット項を、常に '+' または '-' を前置した形で返します。
def format_signed_offset(value: int, nbits: int) -> str:
    negative, magnitude = split_sign(value, nbits)
    return f"{'-' if negative else '+'}{magnitude:#x}"
