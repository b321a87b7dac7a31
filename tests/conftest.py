from pytest import Item, fixture

from stackcalc.lexer import Lexer
from stackcalc.machine import Machine


@fixture
def lexer():
    return Lexer()


@fixture
def machine():
    return Machine()


@fixture
def run(lexer, machine):
    '''
    Feed lines to one machine, returning the stack after the last one.
    '''
    def run(*lines):
        for line in lines:
            machine.execute(lexer.tokens(line))
        return list(machine.stack)
    return run


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
