# masm_render/arch/x86/ptr_names.py
"""
オペランド型からMASMのサイズキーワード（byte, dword など）への変換。
"""
import logging
from typing import Optional

from masm_render.common.errors import UnsupportedTypeError
from masm_render.core.expression import FloatType, IntegerType, OperandType, VectorType

logger = logging.getLogger(__name__)

INTEGER_PTR_NAMES = {8: "byte", 16: "word", 32: "dword", 64: "qword"}
FLOAT_PTR_NAMES = {32: "float", 64: "double", 80: "ldouble"}

# 2 x u64 のベクターは dqword として扱う
_DQWORD = VectorType(2, IntegerType(64))


# @intent:responsibility オペランド型を "byte ptr" などに使うサイズ名に変換します。
# @intent:pre-condition Noneの型は診断ログを出力した上でエラーとなります。
def type_to_ptr_name(operand_type: Optional[OperandType]) -> str:
    if operand_type is None:
        logger.error("type_to_ptr_name: null type")
        raise UnsupportedTypeError("Null operand type")

    if isinstance(operand_type, IntegerType):
        if operand_type.nbits in INTEGER_PTR_NAMES:
            return INTEGER_PTR_NAMES[operand_type.nbits]
    elif isinstance(operand_type, FloatType):
        if operand_type.nbits in FLOAT_PTR_NAMES:
            return FLOAT_PTR_NAMES[operand_type.nbits]
    elif operand_type == _DQWORD:
        return "dqword"
    elif isinstance(operand_type, VectorType):
        return f"V{operand_type.count}" + type_to_ptr_name(operand_type.element)

    logger.critical("Unhandled operand type: %r", operand_type)
    raise UnsupportedTypeError(f"Unhandled operand type: {operand_type!r}")
