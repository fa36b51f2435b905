from typing import Optional

from masm_render.arch.x86.registers import x86_register_name
from masm_render.arch.x86.unparser import X86Unparser
from masm_render.common.types import freeze_labels
from masm_render.listing.printer import GenericUnparser, InstructionDebugPrinter
from .models import RenderConfig

# @intent:responsibility 構成（Config）に基づいて、ラベルマップ、Unparser、Printerを生成・接続します。
class RendererBuilder:
    def build_unparser(self, config: RenderConfig) -> X86Unparser:
        if config.architecture != "x86":
            raise ValueError(f"Unsupported architecture: {config.architecture}")
        # ラベルマップはここで凍結し、以降の描画では読み取り専用とする
        labels = freeze_labels(config.labels)
        return X86Unparser(labels, x86_register_name, config.max_expression_depth)

    def build_printer(
        self,
        config: RenderConfig,
        generic_unparser: Optional[GenericUnparser] = None,
    ) -> InstructionDebugPrinter:
        return InstructionDebugPrinter(
            self.build_unparser(config),
            max_bytes=config.max_opcode_bytes,
            mnemonic_width=config.mnemonic_width,
            generic_unparser=generic_unparser,
            basic_block_lines=config.basic_block_lines,
        )
