from coatings.compiler.base import (
    CompileError,
    PlainCssCompiler,
    StyleCompiler,
    compile_style_page,
)
from coatings.compiler.less import LessCompiler

__all__ = [
    "CompileError",
    "StyleCompiler",
    "PlainCssCompiler",
    "LessCompiler",
    "compile_style_page",
]
