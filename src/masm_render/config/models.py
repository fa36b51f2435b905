from dataclasses import dataclass, field
from typing import Dict

@dataclass
class RenderConfig:
    architecture: str = "x86"
    max_opcode_bytes: int = 8  # 0 で BYTES 欄を出力しない
    mnemonic_width: int = 9
    max_expression_depth: int = 64
    basic_block_lines: bool = True
    labels: Dict[int, str] = field(default_factory=dict)
