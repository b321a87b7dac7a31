'''
Command line tests
'''

import io

from stackcalc.cli import CLI

from pytest import raises


def run(*args):
    CLI().run(args=list(args))


def stdin(data):
    return io.TextIOWrapper(io.BytesIO(data), encoding='utf-8')


def test_expressions(capsys):
    run('-e', 'ldc:1 ldc:2', 'add', '', 'foo', 'ldc:10 ldc:0 div')
    assert capsys.readouterr().out.splitlines() == [
        '[1.0, 2.0]',
        '[3.0]',
        '[3.0]',
        '[3.0]',
        '[3.0, inf]',
    ]


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin',
                        stdin(b'ldc:3 ldc:5 clt\nldc:7 dup pop\n\nadd\n'))
    run()
    assert capsys.readouterr().out == ('[1.0]\n'
                                       '[1.0, 7.0]\n'
                                       '[1.0, 7.0]\n'
                                       '[8.0]\n')


def test_empty_stdin(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', stdin(b''))
    run()
    assert capsys.readouterr().out == ''


def test_silent_by_default(capsys):
    run('-e', 'bogus add')
    out, err = capsys.readouterr()
    assert out == '[]\n'
    assert err == ''


def test_base(capsys):
    run('-b', '-e', 'ldc:1 dup', 'ldc:2 cgt')
    assert capsys.readouterr().out.splitlines() == ['[1.0]', '[1.0, 2.0]']


def test_strict_unknown_token(capsys):
    run('-s', '-e', 'ldc:1', 'ldc:2 bogus')
    out, err = capsys.readouterr()
    assert out.splitlines() == ['[1.0]', '[1.0]']
    assert 'Unknown token bogus' in err


def test_strict_underflow(capsys):
    run('-s', '-e', 'ldc:1 neg add ldc:5')
    out, err = capsys.readouterr()
    assert out.splitlines() == ['[-1.0]']
    assert 'Less than 2 element(s) on stack' in err


def test_verbose(capsys):
    run('-v', '-e', 'ldc:1 bogus add')
    out, err = capsys.readouterr()
    assert out == '[1.0]\n'
    assert 'Dropped token bogus' in err
    assert 'Skipped add' in err


def test_dump(capsys):
    run('-D', '-e', 'ldc:1.5 nope sub')
    assert capsys.readouterr().out.splitlines() == [
        '<token>\t<opcode>\t<arity>',
        'ldc:1.5\tldc:1.5\t0',
        'nope\t-\t-',
        'sub\tsub\t2',
    ]


def test_raw_grammar(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', stdin(b''))
    run('-G')
    out = capsys.readouterr().out
    assert '(?<ldc>' in out
    assert '(?<keyword>' in out


def test_read_failure(capsys, monkeypatch):
    class Broken:
        def isatty(self):
            return False

        @property
        def buffer(self):
            raise OSError('broken pipe')

    monkeypatch.setattr('sys.stdin', Broken())
    with raises(SystemExit) as exc:
        run()
    assert exc.value.code == 1
    assert 'broken pipe' in capsys.readouterr().err


def test_undecodable_line(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', stdin(b'ldc:1\n\xff\nldc:2\n'))
    with raises(SystemExit) as exc:
        run()
    assert exc.value.code == 1
    out, err = capsys.readouterr()
    assert out == '[1.0]\n'
    assert 'utf-8' in err
