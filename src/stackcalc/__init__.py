'''
Postfix stack machine calculator.

Reads lines of whitespace-separated opcodes and runs them against one stack
that persists from line to line, printing the stack after every line::

    $ printf 'ldc:1 ldc:2\nadd\n' | stackcalc
    [1.0, 2.0]
    [3.0]

Opcodes are ``ldc:<float>`` (push), ``neg add sub mul div`` and, unless
running the base variant, ``ceq cgt clt dup pop``. Anything else is dropped,
and opcodes without enough operands on the stack are skipped.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine
from .opcodes import Op, Opcode


__all__ = 'Machine', 'Lexer', 'CLI', 'Op', 'Opcode'
