from os import isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .errors import ParseError, YardError
from .lexer import tokenize
from .machine import execute
from .parser import parse
from .registry import Registry


FORMAT = '[%(levelname)s %(name)s] %(message)s'


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression evaluator.
    '''

    DEFAULT_PROMPT = '>> '
    HISTORY_FILE = '~/.yard_history'

    def _registry(self):
        if self.args.macros:
            return Registry.default_with_macros()
        return Registry.default()

    def _lines(self):
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def dumper(self):
        '''
        Dump the tokens and instructions of each line.
        '''
        registry = self._registry()
        for line in self._lines():
            try:
                tokens = tokenize(line, registry)
            except YardError as e:
                print('Error:', e, file=sys.stderr)
                continue
            print('[tokens]', *('{}({!r})'.format(token.kind.name, token.text)
                                for token in tokens), sep='\t')
            try:
                instructions = parse(tokens, registry)
            except ParseError as e:
                print(e.report(tokens), file=sys.stderr)
                continue
            print('[instructions]', *map(repr, instructions), sep='\t')

    def executor(self):
        '''
        Evaluate each line, keeping variables between lines.
        '''
        registry = self._registry()
        variables = {}
        for line in self._lines():
            # Abort the line on the first error, keep going with the next.
            try:
                tokens = tokenize(line, registry)
                try:
                    instructions = parse(tokens, registry)
                except ParseError as e:
                    print(e.report(tokens), file=sys.stderr)
                    continue
                print(execute(instructions, variables, registry))
            except YardError as e:
                print('Error:', e, file=sys.stderr)

    def dialect(self):
        '''
        Print the operators, functions and macros available.
        '''
        registry = self._registry()
        print('binary operators:',
              *('{} ({})'.format(op.token, op.precedence)
                for op in registry.binary_operators))
        print('unary operators:',
              *(op.token for op in registry.unary_operators))
        print('functions:', *('{}/{}'.format(fn.token,
                                             '*' if fn.variadic else fn.arity)
                              for fn in registry.functions))
        print('macros:', *map(repr, registry.macros))

    def _prompting_input(self):
        '''
        Return a prompting input if either:

        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Shunting-yard expression evaluator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-m', '--macros',
                                          action='store_true',
                                          help='enable assignment: a = 1')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-H', '--dialect', self.dialect),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format=FORMAT)
        if self.args.expressions is sys.stdin and self.args.action != \
           self.dialect:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
