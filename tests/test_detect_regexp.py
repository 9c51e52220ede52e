import re

import pytest

import vstr


PATTERN = r"(hi_how_are_you)|(hello)|(привет\d+)"
FRUIT = ["apple", "banana", "pear", "pinapple"]
JOBS = [1, 4]


def regex_detect_python(data, pattern):
    compiled_pattern = re.compile(pattern)
    return [None if s is None else compiled_pattern.search(s) is not None for s in data]


def generate_test_data(size):
    """Generate test data and expected results together."""
    data = [f"making_this_string_long_enough_to_test_hi_привет{i}" if i % 2 else f"no_match_{i}" for i in range(size)]
    expected = [bool(i % 2) for i in range(size)]
    return data, expected


class TestDetect:
    @pytest.mark.parametrize("jobs", JOBS)
    def test_detect(self, jobs):
        data, expected = generate_test_data(10)
        result = vstr.regexp.detect(data=data, pattern=PATTERN, jobs=jobs)
        assert result == expected

    @pytest.mark.parametrize("jobs", JOBS)
    def test_empty_list(self, jobs):
        assert vstr.regexp.detect(data=[], pattern=PATTERN, jobs=jobs) == []

    @pytest.mark.parametrize(
        "pattern, expected",
        [
            (r"a", [True, True, True, True]),
            (r"^a", [True, False, False, False]),
            (r"a$", [False, True, False, False]),
            (r"b", [False, True, False, False]),
            (r"[aeiou]", [True, True, True, True]),
        ],
    )
    def test_fruit(self, pattern, expected):
        assert vstr.regexp.detect(FRUIT, pattern) == expected

    @pytest.mark.parametrize("jobs", JOBS)
    def test_missing_strings(self, jobs):
        data = ["apple", None, "kiwi", None]
        result = vstr.regexp.detect(data=data, pattern=r"p", jobs=jobs)
        assert result == [True, None, False, None]

    def test_missing_pattern(self):
        assert vstr.regexp.detect(["apple", None, ""], None) == [None, None, None]

    def test_empty_pattern_matches_everything(self):
        assert vstr.regexp.detect(["apple", ""], "") == [True, True]

    def test_case_insensitive(self):
        assert vstr.regexp.detect(["Apple", "apple", "pear"], r"^a", case=True) == [True, True, False]
        assert vstr.regexp.detect(["Apple", "apple", "pear"], r"^a") == [False, True, False]

    def test_compiled_pattern(self):
        assert vstr.regexp.detect(FRUIT, re.compile(r"^p")) == [False, False, True, True]

    def test_compiled_pattern_with_case_flag(self):
        with pytest.raises(ValueError):
            vstr.regexp.detect(FRUIT, re.compile(r"^p"), case=True)

    def test_invalid_pattern(self):
        with pytest.raises(re.error):
            vstr.regexp.detect(FRUIT, r"(unclosed")

    def test_pattern_must_be_single_string(self):
        with pytest.raises(TypeError):
            vstr.regexp.detect(FRUIT, [r"a", r"b"])

    @pytest.mark.parametrize("jobs", JOBS)
    def test_matches_python(self, jobs):
        data = ["abc123", None, "", "xyz", "42"]
        assert vstr.regexp.detect(data, r"\d", jobs=jobs) == regex_detect_python(data, r"\d")

    @pytest.mark.parametrize("jobs", JOBS)
    def test_unicode(self, jobs):
        data = ["привет_мир", "你好世界", "नमस्ते दुनिया", "hello"]
        pattern = r"(мир)|(世界)|(दुनिया)"
        result = vstr.regexp.detect(data=data, pattern=pattern, jobs=jobs)
        assert result == [True, True, True, False]

    @pytest.fixture
    def seen_jobs(self, monkeypatch):
        seen = []
        map_strings = vstr.internal.map_strings

        def recording_map_strings(func, data, jobs=1):
            seen.append(jobs)
            return map_strings(func, data, jobs)

        monkeypatch.setattr(vstr.internal, "map_strings", recording_map_strings)
        monkeypatch.setattr(vstr.regexp.os, "cpu_count", lambda: 3)
        return seen

    def test_auto_jobs_free_threaded(self, monkeypatch, seen_jobs):
        monkeypatch.setattr(vstr.regexp.sys, "_is_gil_enabled", lambda: False, raising=False)

        data, expected = generate_test_data(vstr.regexp.PARALLEL_THRESHOLD + 500)
        assert vstr.regexp.detect(data, PATTERN) == expected
        assert vstr.regexp.detect(data[:10], PATTERN) == expected[:10]
        assert seen_jobs == [3, 1]

    def test_auto_jobs_single_worker_with_gil(self, monkeypatch, seen_jobs):
        monkeypatch.setattr(vstr.regexp.sys, "_is_gil_enabled", lambda: True, raising=False)

        data, expected = generate_test_data(vstr.regexp.PARALLEL_THRESHOLD + 500)
        assert vstr.regexp.detect(data, PATTERN) == expected
        assert vstr.regexp.detect(data, PATTERN, jobs=2) == expected
        assert seen_jobs == [1, 2]

    @pytest.mark.parametrize("pattern", [PATTERN, None])
    @pytest.mark.parametrize("jobs", [0, -2])
    def test_invalid_jobs(self, pattern, jobs):
        with pytest.raises(ValueError):
            vstr.regexp.detect(["apple"], pattern, jobs=jobs)
