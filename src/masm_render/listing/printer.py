# masm_render/listing/printer.py
"""
命令デバッグ出力モジュール。

アドレス、ニーモニック、オペランド文字列、生バイト列を1行のデバッグ表示にまとめます。
"""
import logging
from typing import Callable, Iterable, Optional, Sequence

from masm_render.arch.x86.unparser import X86Unparser
from masm_render.core.instruction import Instruction

logger = logging.getLogger(__name__)

NULL_INSTRUCTION_TEXT = "NULL!"
TARGET_ARCHITECTURE = "x86"

# @intent:data_structure x86以外の命令全体を描画する汎用Unparserの型。
GenericUnparser = Callable[[Instruction], str]


# @intent:responsibility 先頭max_bytes個のバイトを大文字16進で連結し、切り詰めた場合は'+'を付加します。
def format_opcode_bytes(data: Sequence[int], max_bytes: int) -> str:
    shown = data[:max_bytes]
    result = "".join(f"{b:02X}" for b in shown)
    if len(data) > max_bytes:
        result += "+"
    return result


# @intent:responsibility 命令を "ADDR: MNEMONIC  OP1, OP2 ; BYTES: .." 形式の1行に整形します。
class InstructionDebugPrinter:
    """
    x86命令はX86Unparserでオペランドを描画し、それ以外のアーキテクチャは汎用Unparserに委譲します。
    """
    def __init__(
        self,
        unparser: X86Unparser,
        max_bytes: int = 8,
        mnemonic_width: int = 9,
        generic_unparser: Optional[GenericUnparser] = None,
        basic_block_lines: bool = True,
    ):
        self._unparser = unparser
        self._max_bytes = max_bytes
        self._mnemonic_width = mnemonic_width
        self._generic_unparser = generic_unparser
        self._basic_block_lines = basic_block_lines

    def _bytes_suffix(self, inst: Instruction) -> str:
        if self._max_bytes > 0:
            return " ; BYTES: " + format_opcode_bytes(inst.raw_bytes, self._max_bytes)
        return ""

    # @intent:responsibility 各オペランドを描画してカンマ区切りで連結します。
    def format_operands(self, inst: Instruction) -> str:
        return ", ".join(self._unparser.unparse(op, inst.is_lea) for op in inst.operands)

    def format_instruction(self, inst: Optional[Instruction]) -> str:
        if inst is None:
            return NULL_INSTRUCTION_TEXT

        if inst.architecture != TARGET_ARCHITECTURE:
            if self._generic_unparser is None:
                raise ValueError(f"Unsupported architecture: {inst.architecture}")
            logger.debug("Delegating %s instruction at %#x to generic unparser", inst.architecture, inst.address)
            return f"0x{inst.address:08X} " + self._generic_unparser(inst) + self._bytes_suffix(inst)

        line = f"{inst.address:X}: {inst.mnemonic:<{self._mnemonic_width}} {self.format_operands(inst)}"
        return line + self._bytes_suffix(inst)

    # @intent:responsibility 基本ブロックの並びを1命令1行のリストとして描画します。
    # @intent:pre-condition ブロックの順序は呼び出し側で決定済みであること。
    def render_listing(
        self,
        blocks: Iterable[Sequence[Instruction]],
        basic_block_lines: Optional[bool] = None,
    ) -> str:
        if basic_block_lines is None:
            basic_block_lines = self._basic_block_lines
        lines = []
        for block in blocks:
            for inst in block:
                lines.append(self.format_instruction(inst) + "\n")
            if basic_block_lines:
                lines.append("\n")
        return "".join(lines)
