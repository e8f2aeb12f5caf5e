import pytest

from prediction.errors import InvalidStateError, UnsupportedSymbolError
from prediction.predictor import PredictionResult, PredictorState, WordPredictor


def test_starts_idle(predictor):
    assert predictor.state == PredictorState.IDLE
    assert predictor.history == " "
    assert predictor.tap_count == 0
    assert predictor.hypotheses == ()
    assert predictor.last_result == PredictionResult("", "")


def test_typing_hello_at_key_centres(predictor, typist):
    result = typist(predictor, "hello")

    assert result.best == "hello"
    assert result.full_text == "hello"
    assert result.suggestions[0] == "hello"
    assert predictor.state == PredictorState.TYPING
    assert predictor.tap_count == 5


def test_first_tap_seeds_from_empty_word(predictor, typist):
    result = typist(predictor, "h")

    assert result.suggestions == ("h",)
    assert [text for text, _ in predictor.hypotheses] == ["h"]


def test_fuzzy_taps_keep_bounded_sorted_beam(fuzzy_predictor, typist):
    result = typist(fuzzy_predictor, "hel")

    assert 1 <= len(result.suggestions) <= 3
    hypotheses = fuzzy_predictor.hypotheses
    assert 1 <= len(hypotheses) <= 5
    assert [text for text, _ in hypotheses][:len(result.suggestions)] == list(result.suggestions)
    weights = [w for _, w in hypotheses]
    assert weights == sorted(weights, reverse=True)
    assert len({text for text, _ in hypotheses}) == len(hypotheses)
    assert all(len(text) == 3 for text, _ in hypotheses)
    assert result.best == result.suggestions[0]


def test_same_taps_give_same_results(fuzzy_keyboard, small_lm, no_corpus_config):
    taps = [(150, 250), (110, 180), (330, 250), (320, 255)]
    first = WordPredictor(fuzzy_keyboard, no_corpus_config, small_lm)
    second = WordPredictor(fuzzy_keyboard, no_corpus_config, small_lm)

    for x, y in taps:
        assert first.on_tap(x, y) == second.on_tap(x, y)
    assert first.hypotheses == second.hypotheses


def test_backspace_undoes_last_tap_exactly(fuzzy_keyboard, small_lm, no_corpus_config):
    taps = [(150, 250), (110, 180), (330, 250)]
    reference = WordPredictor(fuzzy_keyboard, no_corpus_config, small_lm)
    edited = WordPredictor(fuzzy_keyboard, no_corpus_config, small_lm)

    for x, y in taps:
        expected = reference.on_tap(x, y)
        edited.on_tap(x, y)
    edited.on_tap(300, 200)
    result = edited.on_backspace()

    assert result == expected
    assert edited.hypotheses == reference.hypotheses
    assert edited.taps == reference.taps


def test_backspace_after_hello_matches_first_four_taps(predictor, typist, crisp_keyboard,
                                                       small_lm, no_corpus_config):
    typist(predictor, "hello")
    result = predictor.on_backspace()

    fresh = WordPredictor(crisp_keyboard, no_corpus_config, small_lm)
    expected = typist(fresh, "hell")

    assert predictor.tap_count == 4
    assert predictor.hypotheses == fresh.hypotheses
    assert result == expected
    assert predictor.backspace_count == 1


def test_backspace_last_letter_clears_word(predictor, typist):
    typist(predictor, "h")
    result = predictor.on_backspace()

    assert result == PredictionResult("", "")
    assert predictor.state == PredictorState.IDLE
    assert predictor.hypotheses == ()


def test_space_commits_best_word(predictor, typist):
    typist(predictor, "hello")
    result = predictor.on_space()

    assert result.full_text == "hello "
    assert result.best == "hello"
    assert result.suggestions == ()
    assert predictor.history == "hello "
    assert predictor.committed_words == ("hello",)
    assert predictor.state == PredictorState.IDLE
    assert predictor.hypotheses == ()


def test_next_word_is_predicted_after_history(predictor, typist, small_lm, monkeypatch):
    typist(predictor, "hello")
    predictor.on_space()

    contexts = []
    witten_bell = small_lm.witten_bell

    def spy(context):
        contexts.append(context)
        return witten_bell(context)

    monkeypatch.setattr(small_lm, "witten_bell", spy)
    result = typist(predictor, "how")

    assert result.full_text == "hello how"
    assert predictor.history + result.best == "hello how"
    assert "hello " in contexts
    assert "hello ho" in contexts


def test_space_when_idle_is_a_no_op(predictor, typist):
    typist(predictor, "he")
    predictor.on_space()
    before = predictor.last_result

    assert predictor.on_space() == before
    assert predictor.committed_words == ("he",)


def test_tap_off_keyboard_gives_no_suggestions(predictor):
    result = predictor.on_tap(-1000, -1000)

    assert result == PredictionResult("", "")
    assert predictor.state == PredictorState.TYPING
    assert predictor.hypotheses == ()

    predictor.on_space()
    assert predictor.committed_words == ()


def test_suggestion_picked_commits_text(predictor, typist):
    typist(predictor, "hel")
    result = predictor.on_suggestion_picked("help")

    assert result.full_text == "help "
    assert predictor.committed_words == ("help",)
    assert predictor.suggestion_pick_count == 1
    assert predictor.state == PredictorState.IDLE


def test_backspace_over_word_boundary_reopens_word(predictor, typist, crisp_keyboard):
    typist(predictor, "hello")
    predictor.on_space()
    typist(predictor, "how")
    predictor.on_space()

    result = predictor.on_backspace()

    assert predictor.committed_words == ("hello",)
    assert predictor.history == "hello "
    assert result.full_text == "hello how"
    assert result.best == "how"
    assert predictor.taps == tuple(crisp_keyboard.key_centre(c) for c in "how")
    assert predictor.state == PredictorState.TYPING


def test_backspace_reopening_unsupported_word_raises_and_keeps_state(predictor, typist):
    typist(predictor, "he")
    predictor.on_space()
    predictor.on_suggestion_picked("héllo")

    with pytest.raises(UnsupportedSymbolError):
        predictor.on_backspace()

    assert predictor.committed_words == ("he", "héllo")
    assert predictor.history == "he héllo "
    assert predictor.tap_count == 0


def test_backspace_with_nothing_to_delete(predictor):
    result = predictor.on_backspace()

    assert result == PredictionResult("", "")
    assert predictor.backspace_count == 1
    assert predictor.state == PredictorState.IDLE


def test_finish_sentence_without_taps_is_invalid(predictor):
    stats = predictor.on_finish_sentence()

    assert not stats.valid
    assert stats.elapsed_ms == 0


def test_finish_sentence_statistics(predictor, typist):
    typist(predictor, "he")  # clock reads 100.0 then 100.5
    predictor.on_space()
    stats = predictor.on_finish_sentence()

    assert stats.valid
    assert stats.final_phrase == "he"
    assert stats.elapsed_ms == pytest.approx(500.0)
    assert stats.to_tsv() == "he\t0.5\t48.00\t0\t0"


def test_finish_sentence_includes_word_in_progress(predictor, typist):
    typist(predictor, "hello")
    predictor.on_space()
    typist(predictor, "hel")
    predictor.on_backspace()
    predictor.on_suggestion_picked("how")
    typist(predictor, "he")

    stats = predictor.on_finish_sentence()

    assert stats.final_phrase == "hello how he"
    assert stats.backspace_count == 1
    assert stats.suggestion_pick_count == 1


def test_finish_sentence_resets_session(predictor, typist):
    typist(predictor, "hello")
    predictor.on_space()
    predictor.on_backspace()
    predictor.on_finish_sentence()

    assert predictor.history == " "
    assert predictor.committed_words == ()
    assert predictor.tap_count == 0
    assert predictor.backspace_count == 0
    assert predictor.suggestion_pick_count == 0
    assert predictor.last_result == PredictionResult("", "")
    assert not predictor.on_finish_sentence().valid


def test_learn_extends_model(predictor, typist):
    predictor.learn("zebra crossing")
    assert typist(predictor, "zebra").best == "zebra"


def test_configure_layout_moves_keys(predictor):
    before = predictor.keyboard.key_centre('q')
    predictor.configure_layout(200, 200, 0, 0.2, (1.0, 1.0, 1.0))
    assert predictor.keyboard.key_centre('q') != before


def test_destroyed_predictor_rejects_calls(predictor):
    predictor.destroy()

    with pytest.raises(InvalidStateError):
        predictor.on_tap(10, 10)
    with pytest.raises(InvalidStateError):
        predictor.on_backspace()
    with pytest.raises(InvalidStateError):
        predictor.on_finish_sentence()


def test_default_predictor_learns_common_words():
    predictor = WordPredictor()
    assert len(predictor.language_model) > 1000

    x, y = predictor.keyboard.key_centre('t')
    result = predictor.on_tap(x, y)
    assert result.suggestions
    assert len(result.suggestions) <= 3
