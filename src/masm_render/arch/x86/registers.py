# masm_render/arch/x86/registers.py
"""
x86 レジスタ記述子と名前解決。

DirectRegisterノードが保持する記述子を、アセンブラ表記の短いレジスタ名（例: "rax"）に変換します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable

# @intent:responsibility レジスタの種別を定義します。
class RegisterClass(Enum):
    GPR = "GPR"         # 汎用レジスタ (rax..r15)
    SEGMENT = "SEGMENT" # セグメントレジスタ (es..gs)
    IP = "IP"           # 命令ポインタ
    FLAGS = "FLAGS"     # フラグレジスタ
    ST = "ST"           # x87 スタックレジスタ
    XMM = "XMM"         # SSE/AVX ベクタレジスタ

# @intent:responsibility レジスタを一意に識別する記述子。番号、ビットオフセット、ビット幅を持ちます。
@dataclass(frozen=True)
class RegisterDescriptor:
    reg_class: RegisterClass
    number: int = 0
    offset: int = 0 # ah, bh などの上位バイトは 8
    nbits: int = 64

# @intent:data_structure レジスタ記述子から名前を返す関数の型。Unparserにはこの形で注入されます。
RegisterNameResolver = Callable[[Hashable], str]

# エンコーディング順
_LEGACY_GPR = ["ax", "cx", "dx", "bx", "sp", "bp", "si", "di"]
_LOW_BYTE = ["al", "cl", "dl", "bl", "spl", "bpl", "sil", "dil"]
_HIGH_BYTE = ["ah", "ch", "dh", "bh"]
_SEGMENT = ["es", "cs", "ss", "ds", "fs", "gs"]
_IP = {64: "rip", 32: "eip", 16: "ip"}
_FLAGS = {64: "rflags", 32: "eflags", 16: "flags"}
_VECTOR_PREFIX = {128: "xmm", 256: "ymm", 512: "zmm"}


def _gpr_name(desc: RegisterDescriptor) -> str:
    n = desc.number
    if not 0 <= n < 16:
        raise KeyError(desc)
    if n >= 8:
        suffix = {64: "", 32: "d", 16: "w", 8: "b"}.get(desc.nbits)
        if suffix is None or desc.offset != 0:
            raise KeyError(desc)
        return f"r{n}{suffix}"
    if desc.nbits == 64:
        return "r" + _LEGACY_GPR[n]
    if desc.nbits == 32:
        return "e" + _LEGACY_GPR[n]
    if desc.nbits == 16:
        return _LEGACY_GPR[n]
    if desc.nbits == 8:
        if desc.offset == 8 and n < 4:
            return _HIGH_BYTE[n]
        if desc.offset == 0:
            return _LOW_BYTE[n]
    raise KeyError(desc)


# @intent:responsibility x86レジスタ記述子をアセンブラ表記の名前に変換します。
# @intent:pre-condition 未知の記述子はKeyErrorとなります。
def x86_register_name(descriptor: Hashable) -> str:
    """
    RegisterDescriptorを"rax"や"fs"などの正規の短い名前に変換します。
    """
    if not isinstance(descriptor, RegisterDescriptor):
        raise KeyError(descriptor)
    kind = descriptor.reg_class
    if kind is RegisterClass.GPR:
        return _gpr_name(descriptor)
    if kind is RegisterClass.SEGMENT and 0 <= descriptor.number < len(_SEGMENT):
        return _SEGMENT[descriptor.number]
    if kind is RegisterClass.IP and descriptor.nbits in _IP:
        return _IP[descriptor.nbits]
    if kind is RegisterClass.FLAGS and descriptor.nbits in _FLAGS:
        return _FLAGS[descriptor.nbits]
    if kind is RegisterClass.ST and 0 <= descriptor.number < 8:
        return f"st{descriptor.number}"
    if kind is RegisterClass.XMM and descriptor.nbits in _VECTOR_PREFIX and 0 <= descriptor.number < 32:
        return f"{_VECTOR_PREFIX[descriptor.nbits]}{descriptor.number}"
    raise KeyError(descriptor)


# @intent:utility_function 名前から記述子を引くための補助。テストや入力の組み立てで使用します。
def gpr(name: str) -> RegisterDescriptor:
    """
    "rax", "ecx", "r9d", "ah" などの汎用レジスタ名から記述子を生成します。
    """
    for number in range(16):
        for nbits in (64, 32, 16, 8):
            for offset in (0, 8):
                desc = RegisterDescriptor(RegisterClass.GPR, number, offset, nbits)
                try:
                    if _gpr_name(desc) == name:
                        return desc
                except KeyError:
                    continue
    raise ValueError(f"Unknown general purpose register: {name}")


def segment(name: str) -> RegisterDescriptor:
    if name not in _SEGMENT:
        raise ValueError(f"Unknown segment register: {name}")
    return RegisterDescriptor(RegisterClass.SEGMENT, _SEGMENT.index(name), 0, 16)
