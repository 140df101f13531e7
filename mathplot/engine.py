import logging
import math
from dataclasses import dataclass
from enum import Enum

from mathplot.builders import build_aos, build_rpn
from mathplot.curves import CartesianCurve, CurveSequence, EmptyCurve, PolarCurve
from mathplot.errors import ExpressionError
from mathplot.expression import Expr, differentiate, simplify, to_infix, to_postfix
from mathplot.quadrature import rectangular, trapezoidal

logger = logging.getLogger(__name__)


class ExpressionFormat(Enum):
    AOS = 'AOS'
    RPN = 'RPN'


class AreaMethod(Enum):
    RECTANGULAR = 'Rectangular'
    TRAPEZOIDAL = 'Trapezoidal'


class PlotType(Enum):
    CARTESIAN = 'Cartesian'
    POLAR = 'Polar'


@dataclass
class EngineSettings:
    """Integration interval and sampling ranges used when a call does not override them."""
    integ_start: float = -5.0
    integ_end: float = 5.0
    integ_step: float = 0.01
    area_method: AreaMethod = AreaMethod.RECTANGULAR
    plot_min: float = -10.0
    plot_max: float = 10.0
    theta_start: float = 0.0
    theta_end: float = 2 * math.pi
    sample_step: float = 0.05


_BUILDERS = {
    ExpressionFormat.AOS: build_aos,
    ExpressionFormat.RPN: build_rpn,
}

_RENDERERS = {
    ExpressionFormat.AOS: to_infix,
    ExpressionFormat.RPN: to_postfix,
}

_AREA_RULES = {
    AreaMethod.RECTANGULAR: rectangular,
    AreaMethod.TRAPEZOIDAL: trapezoidal,
}


class Engine():
    """
    Holds the current function and its simplified derivative. Both are
    replaced together by set_expression, or both cleared; nothing else
    writes them. Not safe to share between threads without a lock.
    """

    def __init__(self, settings: EngineSettings = None):
        self.settings = settings if settings is not None else EngineSettings()
        self._function: Expr | None = None
        self._derivative: Expr | None = None
        # why the last set_expression call was rejected, None after a success
        self.last_error: Exception | None = None

    @property
    def function(self) -> Expr | None:
        return self._function

    @property
    def derivative(self) -> Expr | None:
        return self._derivative

    def has_function(self) -> bool:
        return self._function is not None

    def has_derivative(self) -> bool:
        return self._derivative is not None

    def reset(self):
        self._function = None
        self._derivative = None
        self.last_error = None

    def set_expression(self, text: str, fmt: ExpressionFormat) -> bool:
        """
        Parses text, simplifies it and derives it. Any failure clears the
        engine instead of raising; the return value tells whether it worked.
        """
        try:
            function = simplify(_BUILDERS[fmt](text))
            derivative = simplify(differentiate(function))
        except (ExpressionError, RecursionError) as e:
            logger.debug('Rejected %s expression %r: %s', fmt.value, text, e)
            self.reset()
            self.last_error = e
            return False

        self._function, self._derivative = function, derivative
        self.last_error = None
        logger.debug('f(x) = %s, f\'(x) = %s', function, derivative)
        return True

    def print(self, fmt: ExpressionFormat) -> 'list[str]':
        """The function and then its derivative in the given notation."""
        if self._function is None:
            return []

        render = _RENDERERS[fmt]
        lines = [render(self._function)]
        if self._derivative is not None:
            lines.append(render(self._derivative))
        return lines

    def area(self, method: AreaMethod = None, start: float = None,
             end: float = None, step: float = None) -> float:
        """Integral of the function (never the derivative), nan when there is none."""
        if self._function is None:
            return math.nan

        s = self.settings
        rule = _AREA_RULES[method if method is not None else s.area_method]
        return rule(self._function,
                    start if start is not None else s.integ_start,
                    end if end is not None else s.integ_end,
                    step if step is not None else s.integ_step)

    def cartesian(self, derivative: bool = False, start: float = None,
                  end: float = None, step: float = None) -> CurveSequence:
        expr = self._pick(derivative)
        if expr is None:
            return EmptyCurve()

        s = self.settings
        return CartesianCurve(expr,
                              start if start is not None else s.plot_min,
                              end if end is not None else s.plot_max,
                              step if step is not None else s.sample_step)

    def polar(self, derivative: bool = False, start: float = None,
              end: float = None, step: float = None) -> CurveSequence:
        expr = self._pick(derivative)
        if expr is None:
            return EmptyCurve()

        s = self.settings
        return PolarCurve(expr,
                          start if start is not None else s.theta_start,
                          end if end is not None else s.theta_end,
                          step if step is not None else s.sample_step)

    def curve(self, plot_type: PlotType, derivative: bool = False) -> CurveSequence:
        if plot_type is PlotType.POLAR:
            return self.polar(derivative)
        return self.cartesian(derivative)

    def _pick(self, derivative: bool) -> Expr | None:
        if self._function is None:
            return None
        return self._derivative if derivative else self._function
