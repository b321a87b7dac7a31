import regex


class RPNError(Exception):
    pass


class UnknownToken(RPNError):
    pass


class StackUnderflow(RPNError):
    pass


# Python writes 1e+16 and 1e-05; the stack is shown as 1e16 and 1e-5.
_EXPONENT = regex.compile(r'e(?<sign>-?)\+?0*(?<digits>\d)')


def format_value(value):
    '''
    Render one stack value.

    Integral values keep their trailing .0, not-a-number is NaN, and
    exponents carry no plus sign or zero padding.
    '''
    if value != value:
        return 'NaN'
    return _EXPONENT.sub(r'e\g<sign>\g<digits>', repr(value))


def format_stack(stack):
    '''
    Render the whole stack, bottom first, e.g. [1.0, 2.0].
    '''
    return '[' + ', '.join(map(format_value, stack)) + ']'
