# masm_render/arch/x86/unparser.py
"""
x86 式ツリーのアセンブラ表記への変換（Unparser）。

オペランド式ツリーを深さ優先で再帰的にたどり、MASM/NASM互換のテキストを生成します。
メモリ参照ではまずアドレッシングパターン認識を試し、失敗した場合は汎用的な描画に戻ります。
"""
import logging
from typing import Callable, Dict, Optional

from masm_render.arch.x86.addressing import match_indirect_address
from masm_render.arch.x86.literals import format_integer
from masm_render.arch.x86.ptr_names import type_to_ptr_name
from masm_render.arch.x86.registers import RegisterNameResolver, x86_register_name
from masm_render.common.errors import ExpressionDepthError, UnsupportedExpressionError
from masm_render.common.types import LabelMap, freeze_labels
from masm_render.core.expression import (
    BinaryAdd,
    BinaryMultiply,
    BinarySubtract,
    DirectRegister,
    Expression,
    IndirectRegister,
    IntegerValue,
    MemoryReference,
)

logger = logging.getLogger(__name__)

NULL_EXPRESSION_TEXT = "BOGUS:NULL"
DEFAULT_MAX_DEPTH = 64
# 常に表示するセグメントオーバーライド
SHOWN_SEGMENTS = ("fs",)


# @intent:responsibility メモリ参照のサイズが曖昧かどうかを判定します。
# @intent:note MASM/NASMはほとんどの場合サイズを推論できるため、現状は常に「曖昧でない」とします。
#              本来の判定は未実装であり、size keyword の出力経路はこのため発火しません。
def is_size_ambiguous(reference: MemoryReference) -> bool:
    return False


# @intent:responsibility x86オペランド式ツリーをテキストに変換します。
class X86Unparser:
    """
    式ツリーの各ノード種別を対応するハンドラに振り分けて描画するクラス。
    ラベルマップとレジスタ名リゾルバはコンストラクタで受け取り、描画中は変更しません。
    """
    def __init__(
        self,
        labels: Optional[LabelMap] = None,
        register_name: RegisterNameResolver = x86_register_name,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._labels: LabelMap = labels if labels is not None else freeze_labels()
        self._register_name = register_name
        self._max_depth = max_depth
        # @intent:rationale 未知のノード種別が黙って処理されないよう、対応表に無い型は即エラーとします。
        self._handlers: Dict[type, Callable[..., str]] = {
            BinaryAdd: self._unparse_add,
            BinarySubtract: self._unparse_subtract,
            BinaryMultiply: self._unparse_multiply,
            MemoryReference: self._unparse_memory_reference,
            DirectRegister: self._unparse_direct_register,
            IndirectRegister: self._unparse_indirect_register,
            IntegerValue: self._unparse_integer,
        }

    @property
    def labels(self) -> LabelMap:
        return self._labels

    @property
    def register_name(self) -> RegisterNameResolver:
        return self._register_name

    # @intent:responsibility 1オペランド分の式ツリーを文字列に変換します。
    # @intent:pre-condition lea_modeはトップレベルのメモリ参照にのみ作用し、子には伝播しません。
    def unparse(self, expr: Optional[Expression], lea_mode: bool = False) -> str:
        return self._unparse(expr, lea_mode, self._labels, 0)

    def _unparse(self, expr, lea_mode: bool, labels: Optional[LabelMap], depth: int) -> str:
        if expr is None:
            return NULL_EXPRESSION_TEXT
        if depth > self._max_depth:
            logger.error("Expression nesting exceeds %d levels", self._max_depth)
            raise ExpressionDepthError(f"Expression nesting exceeds {self._max_depth} levels")
        handler = self._handlers.get(type(expr))
        if handler is None:
            logger.critical("Unhandled expression kind %s", type(expr).__name__)
            raise UnsupportedExpressionError(f"Unhandled expression kind {type(expr).__name__}")
        return handler(expr, lea_mode, labels, depth)

    def _children(self, expr, labels, depth):
        lhs = self._unparse(expr.lhs, False, labels, depth + 1)
        rhs = self._unparse(expr.rhs, False, labels, depth + 1)
        return lhs, rhs

    def _unparse_add(self, expr: BinaryAdd, lea_mode, labels, depth) -> str:
        lhs, rhs = self._children(expr, labels, depth)
        # 右辺が負の値なら "+-" とならないよう直接連結する
        if rhs.startswith("-"):
            return lhs + rhs
        return lhs + "+" + rhs

    def _unparse_subtract(self, expr: BinarySubtract, lea_mode, labels, depth) -> str:
        lhs, rhs = self._children(expr, labels, depth)
        return lhs + "-" + rhs

    def _unparse_multiply(self, expr: BinaryMultiply, lea_mode, labels, depth) -> str:
        lhs, rhs = self._children(expr, labels, depth)
        return lhs + "*" + rhs

    # @intent:responsibility メモリ参照を描画します。
    # @intent:note パターン認識に成功した場合はセグメント処理を含む以降の処理を全て省略します。
    def _unparse_memory_reference(self, expr: MemoryReference, lea_mode, labels, depth) -> str:
        indirect = match_indirect_address(expr.address)
        if indirect is not None:
            return indirect.emit(self._register_name)

        result = ""
        if not lea_mode:
            if is_size_ambiguous(expr):
                result += type_to_ptr_name(expr.type) + " ptr "
            if expr.segment is not None:
                # fs 以外のセグメントオーバーライドは表示しない
                segreg = self._unparse(expr.segment, False, None, depth + 1)
                if segreg in SHOWN_SEGMENTS:
                    result += segreg + ":"
        return result + "[" + self._unparse(expr.address, False, labels, depth + 1) + "]"

    def _unparse_direct_register(self, expr: DirectRegister, lea_mode, labels, depth) -> str:
        return self._register_name(expr.descriptor)

    # @intent:note レジスタ名には解決せず、番号をそのまま表示するレガシー経路です。
    def _unparse_indirect_register(self, expr: IndirectRegister, lea_mode, labels, depth) -> str:
        return f"({expr.index})"

    def _unparse_integer(self, expr: IntegerValue, lea_mode, labels, depth) -> str:
        return format_integer(expr.value, expr.nbits, labels)


# @intent:utility_function 一度きりの描画のための簡易関数。
def unparse_expression(
    expr: Optional[Expression],
    lea_mode: bool = False,
    labels: Optional[LabelMap] = None,
    register_name: RegisterNameResolver = x86_register_name,
) -> str:
    return X86Unparser(labels, register_name).unparse(expr, lea_mode)
