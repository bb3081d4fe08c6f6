"""End-to-end tests for the field transform."""
from __future__ import annotations

import re
import unittest

from plecoise.dictionary import Dictionary, PronunciationEntry, PypinyinDictionary
from plecoise.transform import plecoise, plecoise_fields
from tests.log_utils import log_test_case
from tests.samples import NIHAO_LINK, NIHAO_LINK_UNTONED, ZENMEYANG_LINK, sample_dictionary

TAG_RE = re.compile(r"<[^>]+>")

SAMPLES = [
    "",
    "hello there",
    "hello there, 你好",
    "你好",
    "你好, how's it going, 你怎么样",
    "你好，世界！",
    "我们的 么好 你们",
    "<div>学习中文</div><br>",
    "你們好",
    "x你y好z",
]


def _partial_dictionary() -> Dictionary:
    dictionary = dict(sample_dictionary())
    dictionary.update(
        {
            "你们": (PronunciationEntry.from_syllables(["ni3", "men"]),),
            "么好": (PronunciationEntry.from_syllables(["me", "hao3"]),),
            "我们的": (PronunciationEntry.from_syllables(["wo3", "men5"]),),
        }
    )
    return Dictionary(dictionary)


class PlecoiseScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = sample_dictionary()

    def test_plain_text_unchanged(self) -> None:
        self.assertEqual("hello there", plecoise("hello there", self.dictionary))
        self.assertEqual("", plecoise("", self.dictionary))

    def test_untoned_variant(self) -> None:
        self.assertEqual(f"hello there, {NIHAO_LINK_UNTONED}", plecoise("hello there, 你好"))

    def test_toned_variant(self) -> None:
        self.assertEqual(f"hello there, {NIHAO_LINK}", plecoise("hello there, 你好", self.dictionary))

    def test_two_runs(self) -> None:
        text = "hello there, 你好, how's it going, 你怎么样"
        out = plecoise(text, self.dictionary)

        self.assertEqual(f"hello there, {NIHAO_LINK}, how's it going, {ZENMEYANG_LINK}", out)
        log_test_case(
            "transform:two_runs",
            purpose="annotates each Chinese run with its own lookup",
            inputs={"text": text},
            output=out,
            status="pass",
        )

    def test_already_annotated_is_unchanged(self) -> None:
        for text in (f"hello there, {NIHAO_LINK_UNTONED}", f"hello there, {NIHAO_LINK}"):
            self.assertEqual(text, plecoise(text, self.dictionary))
            self.assertEqual(text, plecoise(text))

    def test_only_fresh_run_is_annotated(self) -> None:
        text = f"hello there, {NIHAO_LINK_UNTONED}, how's it going, 你怎么样"
        self.assertEqual(
            f"hello there, {NIHAO_LINK_UNTONED}, how's it going, {ZENMEYANG_LINK}",
            plecoise(text, self.dictionary),
        )


class PlecoisePropertyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionaries = [None, sample_dictionary(), _partial_dictionary()]

    def test_idempotent(self) -> None:
        for dictionary in self.dictionaries:
            for text in SAMPLES:
                once = plecoise(text, dictionary)
                self.assertEqual(once, plecoise(once, dictionary), text)

    def test_content_preserved(self) -> None:
        for dictionary in self.dictionaries:
            for text in SAMPLES:
                if "<" in text:
                    continue
                self.assertEqual(text, TAG_RE.sub("", plecoise(text, dictionary)))

    def test_non_chinese_passthrough(self) -> None:
        for text in ("hello", "<b>bold</b> & ", "，。！", "們", "naïve café"):
            self.assertEqual(text, plecoise(text, sample_dictionary()))


class PypinyinTransformTests(unittest.TestCase):
    def setUp(self) -> None:
        try:
            self.dictionary = PypinyinDictionary()
        except ImportError as exc:
            self.skipTest(str(exc))

    def test_two_runs_with_default_dictionary(self) -> None:
        text = "hello there, 你好, how's it going, 你怎么样"
        out = plecoise(text, self.dictionary)

        self.assertEqual(f"hello there, {NIHAO_LINK}, how's it going, {ZENMEYANG_LINK}", out)
        log_test_case(
            "transform:pypinyin_two_runs",
            purpose="default pypinyin tones match the CEDICT rendering",
            inputs={"text": text},
            output=out,
            status="pass",
        )

    def test_idempotent_and_content_preserved(self) -> None:
        for text in SAMPLES:
            once = plecoise(text, self.dictionary)
            self.assertEqual(once, plecoise(once, self.dictionary), text)
            if "<" not in text:
                self.assertEqual(text, TAG_RE.sub("", once))

    def test_already_annotated_is_unchanged(self) -> None:
        for text in (f"hello there, {NIHAO_LINK_UNTONED}", f"hello there, {NIHAO_LINK}"):
            self.assertEqual(text, plecoise(text, self.dictionary))


class PlecoiseFieldsTests(unittest.TestCase):
    def test_each_field_transformed(self) -> None:
        flds = "你好\x1fhello\x1f你怎么样"
        out = plecoise_fields(flds, sample_dictionary())

        self.assertEqual(f"{NIHAO_LINK}\x1fhello\x1f{ZENMEYANG_LINK}", out)
        self.assertEqual(flds.count("\x1f"), out.count("\x1f"))

    def test_empty_fields_preserved(self) -> None:
        for flds in ("", "\x1f", "\x1f\x1f你好\x1f"):
            out = plecoise_fields(flds)
            self.assertEqual(flds.count("\x1f"), out.count("\x1f"))
            self.assertEqual(flds.split("\x1f")[0], out.split("\x1f")[0])

    def test_field_selection(self) -> None:
        flds = "你好\x1f你好\x1f你好"
        out = plecoise_fields(flds, sample_dictionary(), fields={1, 7})

        self.assertEqual(["你好", NIHAO_LINK, "你好"], out.split("\x1f"))

    def test_custom_separator(self) -> None:
        self.assertEqual(f"{NIHAO_LINK_UNTONED}|x", plecoise_fields("你好|x", separator="|"))


if __name__ == "__main__":
    unittest.main()
