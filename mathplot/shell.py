import logging
import sys

import matplotlib.pyplot as plt

from mathplot import plotting
from mathplot.engine import AreaMethod, Engine, ExpressionFormat, PlotType


AREA_METHODS = {
    'RECT': AreaMethod.RECTANGULAR,
    'RECTANGULAR': AreaMethod.RECTANGULAR,
    'TRAP': AreaMethod.TRAPEZOIDAL,
    'TRAPEZOIDAL': AreaMethod.TRAPEZOIDAL,
}


class Shell():
    def __init__(self, engine: Engine = None):
        self.engine = engine if engine is not None else Engine()
        self.format = ExpressionFormat.AOS
        self.commands = {
            'AOS': self._aos,
            'RPN': self._rpn,
            'PRINT': self._print,
            'AREA': self._area,
            'PLOT': self._plot,
            'RESET': self._reset,
            'HELP': self._help,
            'EXIT': self._exit,
        }

    def _exit(self, args: str):
        """Syntax: EXIT"""
        raise SystemExit()

    def _help(self, args: str):
        """Syntax: HELP"""
        for handler in self.commands.values():
            print(f'  {handler.__doc__.splitlines()[0]}')

    def _aos(self, args: str):
        """Syntax: AOS <expression>"""
        self._set(args, ExpressionFormat.AOS)

    def _rpn(self, args: str):
        """Syntax: RPN <expression>"""
        self._set(args, ExpressionFormat.RPN)

    def _set(self, text: str, fmt: ExpressionFormat):
        self.format = fmt
        if not self.engine.set_expression(text, fmt):
            print('Invalid expression')
            if self.engine.last_error is not None:
                print(self.engine.last_error)
            return
        self._print('')

    def _print(self, args: str):
        """Syntax: PRINT [AOS|RPN]

        Prints the function and its derivative, in the notation of the last
        expression entered unless one is given.
        """
        fmt = self._parse_choice(args, ExpressionFormat.__members__, self.format,
                                 'PRINT [AOS|RPN]')
        lines = self.engine.print(fmt)
        if not lines:
            print('No function')
            return
        for label, line in zip(("f(x)  =", "f'(x) ="), lines):
            print(f'{label} {line}')

    def _area(self, args: str):
        """Syntax: AREA [RECT|TRAP]

        Prints the area under the function over the configured interval,
        [-5, 5] by default.
        """
        method = self._parse_choice(args, AREA_METHODS, self.engine.settings.area_method,
                                    'AREA [RECT|TRAP]')
        print(self.engine.area(method))

    def _plot(self, args: str):
        """Syntax: PLOT [CARTESIAN|POLAR]

        Plots the function and its derivative using matplotlib without
        blocking the main thread.
        """
        plot_type = self._parse_choice(args, PlotType.__members__, PlotType.CARTESIAN,
                                       'PLOT [CARTESIAN|POLAR]')
        plotting.plot(self.engine, plot_type)
        plt.show(block=False)

    def _reset(self, args: str):
        """Syntax: RESET"""
        self.engine.reset()

    @staticmethod
    def _parse_choice(args: str, choices, default, usage: str):
        if not args:
            return default
        choice = choices.get(args.strip().upper())
        if choice is None:
            raise Exception(f'Syntax error. Correct usage:\n  {usage}')
        return choice

    def execute(self, line: str):
        """
        Runs one line. Commands are identified by the first word of the line;
        anything else is read as an AOS expression.
        """
        word, _, args = line.partition(' ')
        handler = self.commands.get(word.upper())
        if handler is not None:
            handler(args.strip())
        else:
            self._aos(line)

    def run(self):
        """The read-eval-print loop."""
        try:
            while True:
                try:
                    line = input('\n>>> ').strip()
                    if not line:
                        continue
                    self.execute(line)
                except SystemExit:
                    break
                except Exception as e:
                    print(e)
        except (KeyboardInterrupt, EOFError):
            pass


def main(argv: 'list[str]' = None):
    argv = sys.argv[1:] if argv is None else argv
    verbose = '-v' in argv or '--verbose' in argv
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    Shell().run()
