from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import asyncio
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import History

from .gateway import JSONFileGateway, MemoryGateway
from .lexer import Lexer, normalize
from .parser import parse
from .session import Calculator
from .util import EvalError


class StoreHistory(History):
    '''
    Prompt up-arrow history backed by a calculator's HistoryStore.

    Only evaluated expressions are remembered: accepted lines are not added
    here, and every new prompt reloads from the store, which the calculator
    updates itself.
    '''

    def __init__(self, store):
        super().__init__()
        self.store = store

    def load_history_strings(self):
        # Most recent first, like the store itself.
        for index in range(len(self.store)):
            yield self.store.expression_at(index)

    async def load(self):
        self._loaded_strings = list(self.load_history_strings())
        self._loaded = True
        for item in self._loaded_strings:
            yield item

    def append_string(self, string):
        pass

    def store_string(self, string):
        pass


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    async def __aiter__(self):
        session = PromptSession(message=self.prompt,
                                enable_suspend=True,
                                enable_open_in_editor=True,
                                history=self.history,
                                prompt_continuation=' ' * len(self.prompt),
                                erase_when_done=False)
        while True:
            try:
                yield await session.prompt_async()
            except EOFError:
                return
            except KeyboardInterrupt:
                continue


async def _iterate(lines):
    for line in lines:
        yield line


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    DATA_DIR = '~/.smartcalc'
    COMMAND_PREFIX = ':'

    HELP = '''\
Type an expression to evaluate it. Commands:
  :history          list history, most recent first
  :saved            list saved formulas
  :save             save the last expression as a formula
  :load N           load saved formula N
  :recall N         load the expression of history entry N
  :rm N             remove saved formula N
  :clear-history    forget all history
  :clear-saved      forget all saved formulas
  :help             show this help'''

    def dumper(self):
        '''
        Dump all tokens and the parse tree of each line.
        '''
        lexer = Lexer()
        print('<kind>\t<value>')
        for line in self.args.expressions:
            try:
                tokens = list(lexer.lex(normalize(line)))
                for token in tokens:
                    print(token.kind, repr(token.value), sep='\t')
                print(parse(tokens))
            except EvalError as e:
                print(e.args[0], file=sys.stderr)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def executor(self):
        '''
        Run the calculator over every input line.
        '''
        asyncio.run(self._execute())

    def _gateway(self):
        if self.args.no_persist:
            return MemoryGateway()
        return JSONFileGateway(self.args.data_dir)

    async def _execute(self):
        calculator = await Calculator.open(self._gateway(),
                                           self.args.capacity)
        lines = self.args.expressions
        if self._interactive():
            lines.history = StoreHistory(calculator.history)
        else:
            lines = _iterate(lines)
        async for line in lines:
            line = line.strip()
            if not line:
                continue
            if line.startswith(self.COMMAND_PREFIX):
                await self.command(calculator, line[len(self.COMMAND_PREFIX):])
            else:
                calculator.load_formula(line)
                await calculator.evaluate()
                print(calculator.result)

    async def command(self, calculator, line):
        '''
        Run one colon command against calculator.
        '''
        name, _, argument = line.partition(' ')
        argument = argument.strip()
        if name == 'history':
            self._listing(calculator.history)
        elif name == 'saved':
            self._listing(calculator.saved_formulas)
        elif name == 'save':
            if await calculator.save_current_formula():
                print('Formula saved')
        elif name == 'clear-history':
            await calculator.clear_history()
        elif name == 'clear-saved':
            await calculator.clear_saved_formulas()
        elif name in {'load', 'recall', 'rm'}:
            if not argument.isdigit():
                print('{} needs an entry number'.format(name), file=sys.stderr)
                return
            index = int(argument)
            if name == 'load':
                if index < len(calculator.saved_formulas):
                    calculator.load_formula(calculator.saved_formulas[index])
                    print(calculator.expression)
                else:
                    print('No saved formula {}'.format(index), file=sys.stderr)
            elif name == 'recall':
                calculator.load_history_at(index)
                print(calculator.expression)
            elif await calculator.remove_saved_formula_at(index) is None:
                print('No saved formula {}'.format(index), file=sys.stderr)
        elif name == 'help':
            print(self.HELP)
        else:
            print('Unknown command {!r}, try :help'.format(name),
                  file=sys.stderr)

    def _listing(self, store):
        for index, item in enumerate(store):
            print(index, item, sep='\t')

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-d', '--data-dir',
                                          default=self.DATA_DIR,
                                          help='where history and saved '
                                               'formulas are kept')
        self.argument_parser.add_argument('--no-persist',
                                          action='store_true',
                                          help='keep history and saved '
                                               'formulas in memory only')
        self.argument_parser.add_argument('-n', '--capacity',
                                          type=int,
                                          default=None,
                                          help='entries kept per list')
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
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(stream=sys.stderr,
                            level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(levelname)s %(name)s: %(message)s')
        if self.args.expressions is sys.stdin and \
           self.args.action == self.executor:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)