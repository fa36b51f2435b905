"""
x86 Architecture Package
"""
from .unparser import X86Unparser, unparse_expression
from .registers import RegisterClass, RegisterDescriptor, x86_register_name
