"""Tests for the interactive session."""

import pytest

from lispy.config import ReplConfig
from lispy.repl import BANNER, History, ReplSession, run_repl, should_process


@pytest.fixture
def config(tmp_path):
    return ReplConfig(history_enabled=False, history_file=tmp_path / "history")


class TestShouldProcess:
    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_lines_skipped(self, line):
        assert not should_process(line)

    @pytest.mark.parametrize("line", ["/", "/ comment", "//(+ 1 2)"])
    def test_slash_lines_skipped(self, line):
        assert not should_process(line)

    @pytest.mark.parametrize("line", ["(+ 1 2)", "5", " /", "(/ 4 2)"])
    def test_other_lines_processed(self, line):
        assert should_process(line)


class TestReplSession:
    def test_process_line(self, config):
        with ReplSession(config) as session:
            assert session.process_line("(+ 1 2)") == "3"
            assert session.process_line("(- 5)") == "-5"
            assert session.process_line("(/ 1 0)") == "Error: Division by zero!"
            assert session.process_line("(@ 1 2)") == "Error: Invalid Operator!"

    def test_skipped_lines_return_none(self, config):
        with ReplSession(config) as session:
            assert session.process_line("") is None
            assert session.process_line("/ note") is None

    def test_parse_error_returns_diagnostic(self, config):
        with ReplSession(config) as session:
            assert session.process_line("(+ 1 2") == "<stdin>:1:7: error: unexpected end of input"

    def test_session_continues_after_errors(self, config):
        with ReplSession(config) as session:
            session.process_line("(+ 1")
            session.process_line("(/ 1 0)")
            assert session.process_line("(* 6 7)") == "42"

    def test_show_tree(self, config):
        config.show_tree = True
        with ReplSession(config) as session:
            output = session.process_line("7")
        assert output == "lispy\n  number:1:1 '7'\n7"

    def test_not_open(self, config):
        session = ReplSession(config)
        with pytest.raises(RuntimeError):
            session.process_line("1")

    def test_grammar_released_on_exit(self, config):
        with ReplSession(config) as session:
            assert session.grammar is not None
        assert session.grammar is None

    def test_grammar_released_on_error(self, config):
        with pytest.raises(ZeroDivisionError):
            with ReplSession(config) as session:
                1 / 0
        assert session.grammar is None

    def test_history_disabled(self, config):
        assert ReplSession(config).history is None

    def test_deep_nesting_keeps_session_running(self, config):
        line = "(+ 1 " * 400 + "1" + ")" * 400
        with ReplSession(config) as session:
            output = session.process_line(line)
            assert output in ("401", "<stdin>:1:1: error: expression nested too deeply")
            assert session.process_line("(+ 1 2)") == "3"

    def test_nesting_past_the_stack_is_a_diagnostic(self, config):
        line = "(- " * 5000 + "1" + ")" * 5000
        with ReplSession(config) as session:
            assert session.process_line(line) == "<stdin>:1:1: error: expression nested too deeply"
            assert session.process_line("(* 6 7)") == "42"


class TestHistory:
    """History persistence through readline."""

    @pytest.fixture(autouse=True)
    def require_readline(self):
        pytest.importorskip("readline")

    def test_add_and_save(self, tmp_path):
        path = tmp_path / "sub" / "history"
        history = History(path)
        history.load()
        history.add("42")
        history.add("(-5)")
        history.save()

        assert path.exists()
        assert history.entries() == ["42", "(-5)"]

        reloaded = History(path)
        reloaded.load()
        assert reloaded.entries() == ["42", "(-5)"]

    def test_load_missing_file(self, tmp_path):
        history = History(tmp_path / "missing")
        history.load()
        assert len(history) == 0

    def test_session_records_only_processed_lines(self, tmp_path):
        config = ReplConfig(history_file=tmp_path / "history")
        with ReplSession(config) as session:
            session.process_line("1")
            session.process_line("/skip")
            session.process_line("")
            session.process_line("(+")

        history = History(tmp_path / "history")
        history.load()
        assert history.entries() == ["1", "(+"]


class TestRunRepl:
    def _run(self, config, lines):
        inputs = iter(lines)
        prompts: list[str] = []
        output: list[str] = []

        def fake_input(prompt):
            prompts.append(prompt)
            try:
                return next(inputs)
            except StopIteration:
                raise EOFError

        run_repl(config, input_func=fake_input, output=output.append)
        return prompts, output

    def test_banner_and_results(self, config):
        prompts, output = self._run(config, ["(+ 1 2)", "", "/ comment", "(^ 2 10)"])

        assert output == [
            BANNER,
            "Press Ctrl+C to exit\n",
            "3",
            "1024",
            "",
        ]
        assert prompts == ["lispy> "] * 5

    def test_custom_prompt(self, config):
        config.prompt = "> "
        prompts, _ = self._run(config, [])
        assert prompts == ["> "]

    def test_keyboard_interrupt_ends_loop(self, config):
        output: list[str] = []

        def interrupted(prompt):
            raise KeyboardInterrupt

        run_repl(config, input_func=interrupted, output=output.append)
        assert output[-1] == ""

    def test_deeply_nested_line_does_not_end_loop(self, config):
        deep = "(+ 1 " * 5000 + "1" + ")" * 5000
        _, output = self._run(config, [deep, "(* 6 7)"])
        assert output[2:] == ["<stdin>:1:1: error: expression nested too deeply", "42", ""]
