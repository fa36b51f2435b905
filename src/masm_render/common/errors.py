"""
描画処理で発生する回復不能なエラーの定義。
組み込み例外を継承し、呼び出し側が通常の文字列出力と区別できるようにします。
"""


# @intent:responsibility Unparserが処理方法を知らない式ノードに遭遇したことを示します。
class UnsupportedExpressionError(TypeError):
    pass


# @intent:responsibility 8/16/32/64以外のビット幅を持つ整数リテラルを示します。
class UnsupportedWidthError(ValueError):
    pass


# @intent:responsibility 式ツリーの深さが上限を超えたことを示します。
class ExpressionDepthError(ValueError):
    pass


# @intent:responsibility サイズ名に変換できない（またはNoneの）オペランド型を示します。
class UnsupportedTypeError(TypeError):
    pass
