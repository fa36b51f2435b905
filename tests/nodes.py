# tests/nodes.py
"""
テストで式ツリーを組み立てるためのヘルパー。
"""
from masm_render.arch.x86.registers import gpr, segment
from masm_render.core.expression import DirectRegister, IntegerValue


def reg(name: str) -> DirectRegister:
    return DirectRegister(gpr(name))


def seg(name: str) -> DirectRegister:
    return DirectRegister(segment(name))


def imm(value: int, nbits: int = 32) -> IntegerValue:
    return IntegerValue(value, nbits)
