from pytest import fixture

from infix.parser import Evaluator


@fixture
def parsed():
    '''
    Return a function creating an already parse()d Evaluator.
    '''
    def parsed(text, **options):
        evaluator = Evaluator(text, **options)
        evaluator.parse()
        return evaluator
    return parsed


@fixture
def stdin_file(tmp_path, monkeypatch):
    '''
    Return a function replacing the CLI's stdin with a real file of lines.

    Real file, so fileno() and isatty() work.
    '''
    opened = []

    def stdin_file(*lines):
        name = tmp_path / 'stdin'
        name.write_text(''.join(line + '\n' for line in lines))
        fp = open(name)
        opened.append(fp)
        monkeypatch.setattr('infix.cli.stdin', fp)
        return fp

    yield stdin_file
    for fp in opened:
        fp.close()
