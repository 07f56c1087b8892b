import io

import pytest

import forth79
import forth79_repl


def write_program(tmp_path, *lines):
    path = tmp_path / 'program.fth'
    path.write_text('\n'.join(lines) + '\n')
    return path


class TestRunFile():
    def test_runs_every_line(self):
        m = forth79.Machine()
        out = io.StringIO()
        source = io.StringIO(': sq dup * ;\n3 sq .\n4 sq\n')

        assert forth79_repl.run_file(m, source, out)
        assert out.getvalue() == '9'
        assert m.get_stack_state() == [16]

    def test_stops_at_first_failure(self):
        m = forth79.Machine()
        out = io.StringIO()
        source = io.StringIO('1 2\nfoo\n3\n')

        assert not forth79_repl.run_file(m, source, out)
        assert out.getvalue() == '?\n'
        assert m.get_stack_state() == [1, 2]

    def test_windows_line_endings(self):
        m = forth79.Machine()
        out = io.StringIO()

        forth79_repl.run_file(m, io.StringIO('1 2 +\r\n'), out)
        assert m.get_stack_state() == [3]


class TestMain():
    def test_file_mode(self, tmp_path, capsys):
        program = write_program(tmp_path, '1 2 3', '." hi" cr', '4')
        stack_file = tmp_path / 'stack.fth'

        status = forth79_repl.main([str(program), '--stack-file', str(stack_file)])

        assert status == 0
        assert capsys.readouterr().out == 'hi\n\n'
        assert stack_file.read_text() == '1 2 3 4'

    def test_stack_size(self, tmp_path, capsys):
        program = write_program(tmp_path, '1 2 3')
        stack_file = tmp_path / 'stack.fth'

        forth79_repl.main([str(program), '--stack-size', '4', '--stack-file', str(stack_file)])

        assert capsys.readouterr().out == 'stack-overflow\n\n'
        assert stack_file.read_text() == '1 2'

    def test_stack_size_setting(self, tmp_path, capsys):
        program = write_program(tmp_path, '1 2 3')
        stack_file = tmp_path / 'stack.fth'

        forth79_repl.main([str(program), 'stack-size=4', '--stack-file', str(stack_file)])

        assert capsys.readouterr().out == 'stack-overflow\n\n'
        assert stack_file.read_text() == '1 2'

    def test_stack_size_setting_beats_default(self):
        args = forth79_repl.parse_args(['program.fth', 'STACK-SIZE=64'])

        assert args.source == 'program.fth'
        assert args.stack_size == 64

    def test_bad_stack_size_setting(self, capsys):
        with pytest.raises(SystemExit):
            forth79_repl.parse_args(['program.fth', 'stack-size=lots'])
        assert 'invalid stack size' in capsys.readouterr().err

        with pytest.raises(SystemExit):
            forth79_repl.parse_args(['program.fth', 'heap=4'])

    def test_missing_file(self, tmp_path, capsys):
        status = forth79_repl.main([str(tmp_path / 'nope.fth')])

        assert status == 1
        assert 'nope.fth' in capsys.readouterr().err

    def test_interactive(self, monkeypatch, capsys):
        lines = iter(['1 2 + .', 'bye'])
        monkeypatch.setattr('builtins.input', lambda prompt='': next(lines))

        assert forth79_repl.main([]) == 0
        assert '3' in capsys.readouterr().out

    def test_interactive_end_of_file(self, monkeypatch):
        def no_input(prompt=''):
            raise EOFError()
        monkeypatch.setattr('builtins.input', no_input)

        assert forth79_repl.main([]) == 0
