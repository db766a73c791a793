import random

import pytest
from chat_client.helpers.language import count_languages, is_english, is_latin_sentence


@pytest.mark.parametrize(
    "text",
    ["", "Hello", "Hello there", "  hi   you ", "你好朋友是谁", "Hi, 你好"],
)
def test_is_english_needs_three_words(text):
    for seed in range(20):
        assert is_english(text, random.Random(seed)) is False


def test_is_english_plain_english():
    results = [is_english("Hello there friend", random.Random(seed)) for seed in range(50)]

    assert all(results)


def test_is_english_chinese():
    assert is_english("你好朋友是谁") is False


def test_is_english_ignores_punctuation_and_digits():
    assert is_english("Hello, there! My 2 friends.", random.Random(1)) is True


@pytest.mark.parametrize("word", ["don't", "well-known", "friend's", "rock-n-roll"])
def test_is_english_accepts_hyphens_and_apostrophes(word):
    text = f"{word} {word} {word}"

    assert is_english(text, random.Random(0)) is True


def test_is_english_rejects_malformed_words():
    assert is_english("-- '' --", random.Random(0)) is False


def test_is_english_samples_with_injected_rng():
    class PickFirst:
        def choice(self, words):
            return words[0]

    assert is_english("hello -- world there", PickFirst()) is True


def test_is_english_sampling_can_miss_bad_words():
    class PickLast:
        def choice(self, words):
            return words[-1]

    assert is_english("-- hello world there", PickLast()) is True
    assert is_english("hello world there --", PickLast()) is False


def test_is_latin_sentence():
    assert is_latin_sentence("Hello, world! How are you?") is True
    assert is_latin_sentence("你好，世界") is False
    assert is_latin_sentence("") is False


def test_count_languages():
    assert count_languages("你好 hello world 朋友") == (4, 2)
    assert count_languages("") == (0, 0)
