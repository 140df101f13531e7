"""
Single-variable expression engine: parses AOS or RPN input, derives and
simplifies it, and exposes renderings, sample points and areas.
"""
from mathplot.engine import AreaMethod, Engine, EngineSettings, ExpressionFormat, PlotType
from mathplot.errors import (BuildError, ExpressionError, LocationalError,
                             SequenceExhaustedError, StackError)
from mathplot.expression import BinOp, Const, Expr, Func, Var

__all__ = [
    'AreaMethod', 'Engine', 'EngineSettings', 'ExpressionFormat', 'PlotType',
    'BuildError', 'ExpressionError', 'LocationalError', 'SequenceExhaustedError', 'StackError',
    'BinOp', 'Const', 'Expr', 'Func', 'Var',
]
