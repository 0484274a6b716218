from os import isatty, path
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .lexer import Lexer
from .parser import Evaluator


class InteractiveInput:
    '''
    Expressions typed at a prompt, one per line, until EOF.
    '''
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        session = PromptSession(message=self.prompt,
                                history=self.history,
                                vi_mode=True,
                                enable_suspend=True)
        while True:
            try:
                yield session.prompt()
            except EOFError:
                return


class CLI:
    '''
    Command line interface to the infix evaluator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.infix_history'

    def _lines(self):
        '''
        Yield non-blank expressions, stripped.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def dumper(self):
        '''
        Dump all tokens: kind, lexeme, value and offset.
        '''
        print('<kind>\t<repr(lexeme)>\t<value>\t<offset>')
        for line in self._lines():
            for token in Lexer(line):
                print(token.kind.name,
                      repr(token.lexeme),
                      token.value,
                      token.offset,
                      sep='\t')

    def executor(self):
        '''
        Evaluate each expression, printing its value.
        '''
        for line in self._lines():
            evaluator = Evaluator(line,
                                  tight_unary=self.args.tight_unary,
                                  flat_power=self.args.flat_power)
            evaluator.parse()
            if evaluator.has_error():
                self.failures += 1
                print('Couldn\'t evaluate {0}: {1}'.format(
                          evaluator.original_text(), evaluator.error),
                      file=sys.stderr)
                if self.args.verbose:
                    print(evaluator.error.diagnose(evaluator.original_text()),
                          file=sys.stderr)
            else:
                print(self._round(evaluator.value()))

    def grammar(self):
        '''
        Print the grammar the evaluator implements.
        '''
        print(Evaluator.GRAMMAR)

    def raw_grammar(self):
        '''
        Print current internally defined number literal pattern.
        '''
        print(Lexer.NUMBER)

    def _round(self, n):
        '''
        Round number to precision (on output) if asked to.
        '''
        if self.args.precision is None:
            return n
        else:
            return round(n, self.args.precision)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.failures = 0
        self.argument_parser = ArgumentParser(
            description='Infix arithmetic evaluator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='point at where evaluation '
                                               'failed')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          help='round results to this many '
                                               'decimal places')
        self.argument_parser.add_argument('-u', '--tight-unary',
                                          action='store_true',
                                          help='unary minus negates only '
                                               'the next number or group')
        self.argument_parser.add_argument('-f', '--flat-power',
                                          action='store_true',
                                          help='^ binds like * and /')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-g', '--grammar',
                                       self.grammar),
                                      ('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Exits with status 1 if any non-interactive expression failed.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
        if self.failures and not self._interactive():
            exit(1)
