# tests/arch/x86/test_addressing.py
"""
masm_render.arch.x86.addressingモジュールの単体テスト。
"""
import pytest

from masm_render.arch.x86.addressing import IndirectAddress, match_indirect_address
from masm_render.arch.x86.registers import x86_register_name
from masm_render.common.errors import UnsupportedWidthError
from masm_render.core.expression import BinaryAdd, BinaryMultiply, BinarySubtract
from nodes import imm, reg

# @intent:test_suite [base+index*stride+offset] パターンの順序非依存な認識と正規化出力の検証。

def emit(address) -> str:
    result = match_indirect_address(address)
    assert result is not None
    return result.emit(x86_register_name)

class TestShapes:
    """
    上流の逆アセンブラが生成する2種類のツリー形状の単体テスト。
    """
    # @intent:test_case_left_nested (reg + reg*int) + int 形式を検証します。
    def test_left_nested_shape(self):
        address = BinaryAdd(BinaryAdd(reg("rbx"), BinaryMultiply(reg("rcx"), imm(4, 8))), imm(0x10))
        assert emit(address) == "[rbx+rcx*4+0x10]"

    # @intent:test_case_right_nested reg + (reg*int + int) 形式を検証します。
    def test_right_nested_shape(self):
        address = BinaryAdd(reg("rbx"), BinaryAdd(BinaryMultiply(reg("rcx"), imm(4, 8)), imm(0x10)))
        assert emit(address) == "[rbx+rcx*4+0x10]"

    # @intent:test_case_order_independent 項の順序や積の向きに関わらず同じ出力になることを検証します。
    def test_reordered_terms(self):
        address = BinaryAdd(BinaryAdd(imm(0x10), BinaryMultiply(imm(4, 8), reg("rcx"))), reg("rbx"))
        assert emit(address) == "[rbx+rcx*4+0x10]"

    def test_offset_first_right_nested(self):
        address = BinaryAdd(reg("rbx"), BinaryAdd(imm(0x10), BinaryMultiply(reg("rcx"), imm(4, 8))))
        assert emit(address) == "[rbx+rcx*4+0x10]"

class TestEmit:
    """
    正規化出力の単体テスト。
    """
    # @intent:test_case_scale_one スケール1では "*1" を出力しないことを検証します。
    def test_stride_one_is_suppressed(self):
        address = BinaryAdd(BinaryAdd(reg("rax"), BinaryMultiply(reg("rdx"), imm(1, 8))), imm(0))
        assert emit(address) == "[rax+rdx+0x0]"

    def test_negative_offset(self):
        address = BinaryAdd(BinaryAdd(reg("rbp"), BinaryMultiply(reg("rsi"), imm(8, 8))), imm(0xFFFFFFF8))
        assert emit(address) == "[rbp+rsi*8-0x8]"

    def test_32bit_registers(self):
        address = BinaryAdd(reg("eax"), BinaryAdd(BinaryMultiply(reg("edi"), imm(2, 8)), imm(0x7F, 8)))
        assert emit(address) == "[eax+edi*2+0x7f]"

    def test_result_is_complete(self):
        base = reg("rbx")
        address = BinaryAdd(BinaryAdd(base, BinaryMultiply(reg("rcx"), imm(4, 8))), imm(0x10))
        result = match_indirect_address(address)
        assert isinstance(result, IndirectAddress)
        assert result.base == base
        assert result.index == reg("rcx")
        assert result.stride == imm(4, 8)
        assert result.offset == imm(0x10)

class TestIncomplete:
    """
    曖昧または形状不一致の場合にNoneを返すことの単体テスト。
    """
    @pytest.mark.parametrize("address", [
        # 2つのベースレジスタ
        BinaryAdd(BinaryAdd(reg("rax"), reg("rbx")), imm(4)),
        # 2つのオフセット
        BinaryAdd(BinaryAdd(imm(1), BinaryMultiply(reg("rcx"), imm(4, 8))), imm(4)),
        # 2つのインデックス
        BinaryAdd(BinaryAdd(BinaryMultiply(reg("rax"), imm(2, 8)), BinaryMultiply(reg("rcx"), imm(4, 8))), imm(4)),
        # 4項
        BinaryAdd(BinaryAdd(BinaryAdd(reg("rax"), reg("rbx")), reg("rcx")), imm(4)),
        # レジスタ同士の積
        BinaryAdd(BinaryAdd(reg("rax"), BinaryMultiply(reg("rcx"), reg("rdx"))), imm(4)),
        # どの役割にも当てはまらない項
        BinaryAdd(BinaryAdd(reg("rax"), BinarySubtract(reg("rcx"), imm(1))), imm(4)),
        # ネストしていない加算
        BinaryAdd(reg("rax"), imm(4)),
        # 加算でないアドレス
        reg("rax"),
        imm(0x1000),
    ])
    def test_incomplete_returns_none(self, address):
        assert match_indirect_address(address) is None

    # @intent:test_case_missing_role 3項でも役割が揃わない場合はNoneであることを検証します。
    def test_missing_index_role(self):
        address = BinaryAdd(BinaryAdd(reg("rax"), imm(4)), BinaryMultiply(imm(2, 8), imm(3, 8)))
        assert match_indirect_address(address) is None

class TestUnsupportedWidth:
    """
    スケール/オフセットの非対応ビット幅の単体テスト。
    """
    # @intent:test_case_stride_width 非対応幅のスケールは正規化出力されずエラーとなることを検証します。
    def test_stride_with_unsupported_width(self):
        address = BinaryAdd(BinaryAdd(reg("rbx"), BinaryMultiply(reg("rcx"), imm(4, 12))), imm(0x10))
        with pytest.raises(UnsupportedWidthError):
            match_indirect_address(address)

    def test_offset_with_unsupported_width(self):
        address = BinaryAdd(reg("rbx"), BinaryAdd(BinaryMultiply(reg("rcx"), imm(4, 8)), imm(0x10, 24)))
        with pytest.raises(UnsupportedWidthError):
            match_indirect_address(address)

    # @intent:test_case_emit_width 直接組み立てたIndirectAddressでも幅が検証されることを検証します。
    def test_emit_checks_stride_width(self):
        indirect = IndirectAddress(base=reg("rbx"), index=reg("rcx"), stride=imm(4, 12), offset=imm(0x10))
        with pytest.raises(UnsupportedWidthError):
            indirect.emit(x86_register_name)
