"""Tests for the interactive entry point."""

from unittest.mock import Mock

import pytest

import run_app
from weather_news.core.errors import NotFoundError
from weather_news.pipeline.engine import PipelineEngine, PipelineResult, PipelineState


def _not_found(query):
    return PipelineResult(
        query=query,
        state=PipelineState.FAILED,
        failure=NotFoundError(f"Location not found: {query}", query=query),
    )


@pytest.fixture
def engine():
    eng = Mock(spec=PipelineEngine)
    eng.run.side_effect = _not_found
    eng.run_city.side_effect = lambda city, state: _not_found(f"{city.strip()}, {state.strip()}")
    return eng


@pytest.fixture
def feed(monkeypatch):
    """Replace input() with a scripted sequence of lines."""
    def _feed(*lines):
        it = iter(lines)

        def _input(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError
        monkeypatch.setattr("builtins.input", _input)
    return _feed


class TestHandleInput:
    """Tests for handle_input routing."""

    def test_zipcode_goes_to_run(self, engine):
        run_app.handle_input(engine, "94040")

        engine.run.assert_called_once_with("94040")
        engine.run_city.assert_not_called()

    def test_city_state_goes_to_run_city(self, engine):
        run_app.handle_input(engine, "Austin, TX")

        engine.run_city.assert_called_once_with("Austin", " TX")
        engine.run.assert_not_called()

    def test_invalid_zipcode_skips_engine(self, engine):
        out = run_app.handle_input(engine, "1234")

        assert "Invalid zipcode format" in out
        engine.run.assert_not_called()
        engine.run_city.assert_not_called()


class TestLoop:
    """Tests for the read-eval-print loop."""

    @pytest.mark.parametrize("word", ["quit", "exit", "QUIT"])
    def test_quit_words_stop_loop(self, engine, feed, capsys, word):
        feed(word, "94040")

        run_app.loop(engine)

        assert "Thank you for using Weather and News App!" in capsys.readouterr().out
        engine.run.assert_not_called()

    def test_empty_input_prompts_again(self, engine, feed, capsys):
        feed("   ", "94040", "quit")

        run_app.loop(engine)

        assert "Please enter a valid zipcode." in capsys.readouterr().out
        engine.run.assert_called_once_with("94040")

    def test_eof_ends_loop(self, engine, feed):
        feed("94040")

        run_app.loop(engine)

        engine.run.assert_called_once_with("94040")

    def test_unexpected_error_keeps_looping(self, engine, feed, capsys):
        engine.run.side_effect = [ValueError("cannot convert float NaN to integer"), _not_found("10001")]
        feed("94040", "10001", "quit")

        run_app.loop(engine)

        out = capsys.readouterr().out
        assert out.count("An unexpected error occurred") == 1
        assert "No location found for 10001." in out
        assert engine.run.call_count == 2
        assert "Thank you for using Weather and News App!" in out
