"""
masm_render: 逆アセンブル済みオペランド式ツリーのMASM形式テキスト描画。
"""
__version__ = "0.1.0"
