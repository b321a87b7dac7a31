import sys
from inspect import signature as getsignature, Parameter
from collections import deque
import operator
import math

from .opcodes import Op
from .util import StackUnderflow, format_stack


def _unary(f):
    '''
    Wrap a 1-arg builtin so inspect.getsignature can see its arity.
    '''
    def wrapped(only):
        return f(only)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _binary(f):
    '''
    Wrap a 2-arg builtin so inspect.getsignature can see its arity.
    '''
    def wrapped(left, right):
        return f(left, right)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _compare(f):
    '''
    Turn a comparison into one pushing 1.0 for true and 0.0 for false.
    '''
    def wrapped(left, right):
        return 1.0 if f(left, right) else 0.0
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def truediv(left, right):
    '''
    Same as left / right, but IEEE-754 on division by zero.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def dup(top):
    '''
    Same as (top, top).
    '''
    return top, top


def pop(top):
    '''
    Drop top.
    '''
    return ()


class Machine:
    '''
    Arithmetic stack machine.

    Takes opcodes and runs them against one stack, which lives as long as the
    machine does.
    '''

    # What each opcode does to the top of the stack. Arguments are popped,
    # the result pushed; a tuple result pushes each element, leftmost first.
    OPERATIONS = {
        Op.NEG: _unary(operator.__neg__),
        Op.ADD: _binary(operator.__add__),
        Op.SUB: _binary(operator.__sub__),
        Op.MUL: _binary(operator.__mul__),
        Op.DIV: truediv,
        Op.CEQ: _compare(operator.__eq__),
        Op.CGT: _compare(operator.__gt__),
        Op.CLT: _compare(operator.__lt__),
        Op.DUP: dup,
        Op.POP: pop,
    }

    def __init__(self, strict=False, verbose=False):
        '''
        Create empty stack machine.

        :param strict: Raise StackUnderflow on opcodes missing operands,
                       rather than skipping them.
        :param verbose: Report skipped opcodes on stderr.
        '''
        self.stack = deque()
        self.strict = strict
        self.verbose = verbose

    def execute(self, opcodes):
        '''
        Run opcodes in order against the stack.

        An opcode with too few operands on the stack leaves it untouched and
        the next one runs. In strict mode the StackUnderflow propagates and
        the remaining opcodes don't run.
        '''
        for opcode in opcodes:
            try:
                self.feed(opcode)
            except StackUnderflow as e:
                if self.strict:
                    raise
                if self.verbose:
                    print('Skipped', opcode, e.args[0], file=sys.stderr)

    def feed(self, opcode):
        '''
        Run a single opcode.
        '''
        if opcode.op is Op.LDC:
            self._pshstack(opcode.value)
        else:
            self._apply(type(self).OPERATIONS[opcode.op])

    def arity(self, op):
        '''
        Return the number of operands an opcode kind takes off the stack.
        '''
        if op is Op.LDC:
            return 0
        return self._arity(type(self).OPERATIONS[op])

    def _arity(self, f):
        '''
        Return number of non-default positional arguments.
        '''
        signature = getsignature(f)
        parameters = signature.parameters.values()
        positionals = [parameter
                       for parameter
                       in parameters
                       if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD and
                          parameter.default == Parameter.empty]
        return len(positionals)

    def _apply(self, f):
        '''
        Apply operation to stack, popping arguments as needed.
        '''
        # If you don't reverse, you'll do 2 - 5 when you say 5 2 sub.
        args = reversed(self._popstack(self._arity(f)))
        res = f(*args)
        if isinstance(res, tuple):
            self._pshstack(*res)
        else:
            self._pshstack(res)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.

        Leaves the stack alone if there aren't enough.
        '''
        if len(self.stack) < n:
            raise StackUnderflow('Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]

    def format(self):
        '''
        Render the stack, bottom first.
        '''
        return format_stack(self.stack)
