import sys
from sys import exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL

from prompt_toolkit import PromptSession

from .util import RPNError
from .machine import Machine
from .lexer import Lexer
from .opcodes import BASE, EXTENDED


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class LineInput:
    '''
    Lines of a text stream, decoded one at a time from its bytes.

    Every line before an undecodable one still gets through.
    '''
    def __init__(self, stream, encoding='utf-8'):
        self.stream = stream
        self.encoding = encoding

    def __iter__(self):
        for line in self.stream.buffer:
            yield line.decode(self.encoding)


class CLI:
    '''
    Command line interface to the stack machine.
    '''

    DEFAULT_PROMPT = '> '

    def _lexer(self):
        return Lexer(opcodes=BASE if self.args.base else EXTENDED,
                     strict=self.args.strict,
                     verbose=self.args.verbose)

    def dumper(self):
        '''
        Dump every token, the opcode it parses to, and its arity.
        '''
        machine = Machine()
        lexer = self._lexer()
        print('<token>\t<opcode>\t<arity>')
        for line in self.args.expressions:
            for token in lexer.split(line):
                opcode = lexer.parse(token)
                if opcode is None:
                    print(token, '-', '-', sep='\t')
                else:
                    print(token, opcode, machine.arity(opcode.op), sep='\t')

    def executor(self):
        '''
        Run machine, printing the stack after every line.
        '''
        machine = Machine(strict=self.args.strict,
                          verbose=self.args.verbose)
        lexer = self._lexer()
        for line in self.args.expressions:
            try:
                machine.execute(lexer.tokens(line))
            # Strict only: an unknown token runs none of the line, an underflow
            # skips what follows it.
            except RPNError as e:
                print(e.args[0], file=sys.stderr)
            print(machine.format(), flush=True)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = self._lexer()
        print(lexer.TOKEN)
        print(lexer.FLOAT)

    def _prompting_input(self):
        '''
        Return prompting input, or plain stdin.

        Prompts if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return LineInput(sys.stdin)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Postfix stack machine calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='report dropped tokens and '
                                               'skipped opcodes on stderr')
        self.argument_parser.add_argument('-s', '--strict',
                                          action='store_true',
                                          help='report unknown tokens and '
                                               'stack underflow, abandoning '
                                               'the rest of the line')
        self.argument_parser.add_argument('-b', '--base',
                                          action='store_true',
                                          help='only accept ldc neg add sub '
                                               'mul div')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or the process's command line.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
        except (OSError, UnicodeDecodeError) as e:
            print('I/O error:', e, file=sys.stderr)
            exit(1)


def main():
    CLI().run()
