import pytest

from keyboard.keyboard_model import KeyboardModel
from prediction.config import Config, CorpusConfig
from prediction.language_model import LanguageModel
from prediction.predictor import WordPredictor

SENTENCES = [
    "hello", "hello", "hello",
    "help", "hell", "he",
    "how", "how are you",
    "hello how are you",
    "who are you",
]


class FakeClock:
    """Advances by a fixed step every time it is read."""

    def __init__(self, start=100.0, step=0.5):
        self.now = start - step
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture
def small_lm():
    lm = LanguageModel()
    for s in SENTENCES:
        lm.learn(s)
    return lm


def make_keyboard(tap_flexibility):
    keyboard = KeyboardModel()
    keyboard.configure(400, 400, 40, tap_flexibility, (1.0, 1.0, 1.0))
    return keyboard


@pytest.fixture
def crisp_keyboard():
    # Tap SD small enough that a centred tap only ever scores its own key
    return make_keyboard(0.2)


@pytest.fixture
def fuzzy_keyboard():
    return make_keyboard(0.8)


@pytest.fixture
def no_corpus_config():
    return Config(corpus=CorpusConfig(use_common_words=False))


@pytest.fixture
def predictor(crisp_keyboard, small_lm, no_corpus_config):
    return WordPredictor(crisp_keyboard, no_corpus_config, small_lm, clock=FakeClock())


@pytest.fixture
def fuzzy_predictor(fuzzy_keyboard, small_lm, no_corpus_config):
    return WordPredictor(fuzzy_keyboard, no_corpus_config, small_lm, clock=FakeClock())


def type_word(predictor, word):
    result = None
    for c in word:
        x, y = predictor.keyboard.key_centre(c)
        result = predictor.on_tap(x, y)
    return result


@pytest.fixture
def typist():
    return type_word
