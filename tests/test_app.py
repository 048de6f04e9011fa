import os

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'geo_guesser_app.py'))


def click(at, label):
    button = next(b for b in at.button if b.label == label)
    button.click().run()


@pytest.fixture()
def app():
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def test_guess_input_locked_until_start(app):
    assert app.title[0].value == 'European Geo Guesser'
    assert app.text_input[0].disabled
    assert app.session_state['engine'].state.phase == 'not_started'

    click(app, 'Start Game')
    assert not app.exception
    assert not app.text_input[0].disabled
    assert app.session_state['engine'].state.is_active


def test_correct_guess_adds_found_country(app):
    click(app, 'Start Game')
    app.text_input[0].input('spain')
    click(app, 'Guess')
    assert not app.exception
    engine = app.session_state['engine']
    assert engine.state.score == 1
    assert [c.name for c in engine.state.found] == ['Spain']
    assert any(b.label == 'Spain' for b in app.button)


def test_pause_locks_input(app):
    click(app, 'Start Game')
    click(app, 'Pause/Resume Game')
    assert not app.exception
    assert not app.session_state['engine'].state.is_active
    assert app.text_input[0].disabled
