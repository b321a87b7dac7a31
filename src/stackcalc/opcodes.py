'''
Opcodes of the stack machine.

An opcode is a kind (one of ``Op``) and, for ``Op.LDC`` only, the constant it
pushes.
'''

from collections import namedtuple
from enum import Enum


class Op(Enum):
    '''
    Kinds of opcode, valued by their keyword in the token grammar.
    '''
    LDC = 'ldc'
    NEG = 'neg'
    ADD = 'add'
    SUB = 'sub'
    MUL = 'mul'
    DIV = 'div'
    CEQ = 'ceq'
    CGT = 'cgt'
    CLT = 'clt'
    DUP = 'dup'
    POP = 'pop'


class Opcode(namedtuple('Opcode', 'op value')):
    '''
    One parsed instruction. Immutable.
    '''
    __slots__ = ()

    def __new__(cls, op, value=None):
        return super().__new__(cls, op, value)

    def __str__(self):
        if self.op is Op.LDC:
            return '{}:{!r}'.format(self.op.value, self.value)
        return self.op.value


# The richer variant; canonical.
EXTENDED = frozenset(Op)
# Arithmetic only, no comparisons or stack shuffling.
BASE = frozenset({Op.LDC, Op.NEG, Op.ADD, Op.SUB, Op.MUL, Op.DIV})
