# masm_render/core/instruction.py
"""
デバッグ出力の対象となる命令レコード。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from masm_render.core.expression import Expression

# @intent:responsibility デコード済みの1命令（アドレス、ニーモニック、オペランド式、生バイト列）を記録します。
@dataclass(frozen=True)
class Instruction:
    address: int
    mnemonic: str # 例: "mov"
    operands: List[Optional[Expression]] = field(default_factory=list)
    raw_bytes: bytes = b""
    architecture: str = "x86"

    # @intent:rationale lea命令はアドレスを計算するだけなので、メモリ参照のサイズ/セグメント接頭辞を抑制します。
    @property
    def is_lea(self) -> bool:
        return self.mnemonic.lower() == "lea"
