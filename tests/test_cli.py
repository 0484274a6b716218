'''
Infix command line tests
'''

from infix.cli import CLI, InteractiveInput
from infix.lexer import Lexer
from infix.parser import Evaluator

from pytest import raises


def test_expressions(capsys):
    CLI().run(args=['-e', '2+3*4', '(2+3)*4', '1/0'])
    out, err = capsys.readouterr()
    assert out.splitlines() == ['14.0', '20.0', 'inf']
    assert err == ''


def test_failure_exits(capsys):
    with raises(SystemExit) as e:
        CLI().run(args=['-e', '1+1', '(5-3', '2+@'])
    assert e.value.code == 1
    out, err = capsys.readouterr()
    assert out.splitlines() == ['2.0']
    assert err.splitlines() == [
        "Couldn't evaluate (5-3: Expected ')' but found end of input at 4",
        "Couldn't evaluate 2+@: Couldn't lex '@' at 2",
    ]


def test_verbose(capsys):
    with raises(SystemExit):
        CLI().run(args=['-v', '-e', '2+2)'])
    out, err = capsys.readouterr()
    assert err.splitlines()[1:] == ['2+2)', '   ^']


def test_precision(capsys):
    CLI().run(args=['-k', '3', '-e', '2/3'])
    out, err = capsys.readouterr()
    assert out == '0.667\n'


def test_tight_unary(capsys):
    CLI().run(args=['-u', '-e', '2*-3+1'])
    out, err = capsys.readouterr()
    assert out == '-5.0\n'


def test_flat_power(capsys):
    CLI().run(args=['-f', '-e', '2*3^2'])
    out, err = capsys.readouterr()
    assert out == '36.0\n'


def test_stdin(capsys, stdin_file):
    stdin_file('1.5+1.5', '', '  5-3  ')
    CLI().run(args=[])
    out, err = capsys.readouterr()
    assert out.splitlines() == ['3.0', '2.0']


def test_dump(capsys):
    CLI().run(args=['-D', '-e', '1.5*(2'])
    out, err = capsys.readouterr()
    assert out.splitlines() == [
        '<kind>\t<repr(lexeme)>\t<value>\t<offset>',
        "NUMBER\t'1.5'\t1.5\t0",
        "MULT\t'*'\t0.0\t3",
        "LPAREN\t'('\t0.0\t4",
        "NUMBER\t'2'\t2.0\t5",
        "END\t''\t0.0\t6",
    ]


def test_grammar(capsys):
    CLI().run(args=['-g', '-e'])
    out, err = capsys.readouterr()
    assert out == Evaluator.GRAMMAR + '\n'


def test_raw_grammar(capsys):
    CLI().run(args=['-G', '-e'])
    out, err = capsys.readouterr()
    assert out == Lexer.NUMBER + '\n'


def test_interactive_input(monkeypatch):
    typed = iter(['1+1', '2*3'])
    sessions = []

    class Session:
        def __init__(self, **options):
            sessions.append(options)

        def prompt(self):
            try:
                return next(typed)
            except StopIteration:
                raise EOFError

    monkeypatch.setattr('infix.cli.PromptSession', Session)
    assert list(InteractiveInput('> ')) == ['1+1', '2*3']
    assert sessions == [{'message': '> ',
                         'history': None,
                         'vi_mode': True,
                         'enable_suspend': True}]
