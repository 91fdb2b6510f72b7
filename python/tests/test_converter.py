"""Tests for the Converter."""

import pytest
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType

from conftest import leaf, profile_json, write_data_root
from zhchain import Converter, load, new_converter
from zhchain.builder import LengthBounds
from zhchain.errors import DictFileNotFound, MalformedConfig
from zhchain.schema import ConversionProfile

DEMO_S = (
    "Go 是一个开源的编程语言，它能让构造简单、可靠且高效的软件变得容易。"
    "Go是从2007年末由Robert Griesemer, Rob Pike, Ken Thompson主持开发，"
    "后来还加入了Ian Lance Taylor, Russ Cox等人，并最终于2009年11月开源，"
    "在2012年早些时候发布了Go 1稳定版本。现在Go的开发已经是完全开放的，"
    "并且拥有一个活跃的社区。"
)

DEMO_T = (
    "Go 是一個開源的編程語言，它能讓構造簡單、可靠且高效的軟件變得容易。"
    "Go是從2007年末由Robert Griesemer, Rob Pike, Ken Thompson主持開發，"
    "後來還加入了Ian Lance Taylor, Russ Cox等人，並最終於2009年11月開源，"
    "在2012年早些時候發佈了Go 1穩定版本。現在Go的開發已經是完全開放的，"
    "並且擁有一個活躍的社區。"
)


class TestConvert:
    """Tests for Converter.convert."""

    def test_phrase_scenario(self):
        """Test phrases convert as units."""
        cc = Converter.from_table({"开源": "開源", "编程语言": "編程語言"})
        assert cc.convert("开源的编程语言") == "開源的編程語言"

    def test_no_han_unchanged(self):
        """Test input without Han characters is unchanged."""
        cc = Converter.from_table({"开": "開"})
        for text in ["Go 1", "hello, world!", "ひらがな", "Ω≈ç√"]:
            assert cc.convert(text) == text

    @pytest.mark.parametrize("text", ["", " ", "   \t", "\n"])
    def test_blank_unchanged(self, text):
        """Test whitespace-only input is unchanged."""
        cc = Converter.from_table({"开": "開"})
        assert cc.convert(text) == text

    @pytest.mark.parametrize("text", ["2009", " 3.14 ", "-1e5"])
    def test_numeric_unchanged(self, text):
        """Test numeric literals are unchanged."""
        cc = Converter.from_table({"2009": "X", "3": "Y"})
        assert cc.convert(text) == text

    def test_empty_table_unchanged(self):
        """Test a converter without entries is the identity."""
        cc = Converter.from_table({})
        assert cc.convert("开源的编程语言") == "开源的编程语言"
        assert len(cc) == 0

    def test_punctuation_preserved(self):
        """Test punctuation is kept verbatim and in place."""
        cc = Converter.from_table({"开": "開", ",": "X", "，": "Y"})
        assert cc.convert("“开，开,开”。") == "“開，開,開”。"

    def test_punctuation_splits_keys(self):
        """Test keys never match across punctuation."""
        cc = Converter.from_table({"开源": "開源"})
        assert cc.convert("开，源") == "开，源"

    def test_space_is_a_boundary(self):
        """Test a space splits segments."""
        cc = Converter.from_table({"开源": "開源"})
        assert cc.convert("开 源") == "开 源"

    def test_longest_match(self):
        """Test the longest key wins."""
        cc = Converter.from_table({"AB": "X", "A": "Y", "中": "中"})
        assert cc.convert("中AB") == "中X"

    def test_one_direction_twice_is_stable(self):
        """Test re-converting traditional output changes nothing."""
        cc = Converter.from_table({"开源": "開源", "编程语言": "編程語言", "个": "個"})
        once = cc.convert("一个开源的编程语言")
        assert cc.convert(once) == once

    def test_fail_soft(self):
        """Test a failing segment returns the whole input unchanged."""
        cc = Converter(
            name="broken",
            table={"开": "開", "坏": None, "错": 7},
        )
        text = "开源，错误。"
        assert cc.convert(text) == text

    def test_direct_construction_computes_bounds(self):
        """Test a Converter built without bounds still converts."""
        cc = Converter(name="direct", table={"开": "開", "编程": "編程"})
        assert cc.bounds == LengthBounds(max_key_len=2, min_key_len=1)
        assert cc.convert("开") == "開"
        assert cc.convert("编程") == "編程"

    def test_explicit_bounds_kept(self):
        """Test bounds passed in are not recomputed."""
        cc = Converter(name="narrow", table={"开": "開", "编程": "編程"}, bounds=LengthBounds(1, 1))
        assert cc.bounds == LengthBounds(1, 1)
        assert cc.convert("编程") == "编程"

    def test_call_and_convert_many(self):
        """Test convenience entry points."""
        cc = Converter.from_table({"开": "開"})
        assert cc("开") == "開"
        assert list(cc.convert_many(["开", "Go", "1"])) == ["開", "Go", "1"]

    def test_contains(self):
        """Test key membership."""
        cc = Converter.from_table({"开": "開"})
        assert "开" in cc
        assert "開" not in cc


class TestImmutability:
    """Tests that a Converter can not change after construction."""

    def test_table_is_read_only(self):
        """Test the table rejects writes."""
        source = {"开": "開"}
        cc = Converter.from_table(source)
        assert isinstance(cc.table, MappingProxyType)
        with pytest.raises(TypeError):
            cc.table["编"] = "編"

    def test_source_dict_is_copied(self):
        """Test mutating the source mapping has no effect."""
        source = {"开": "開"}
        cc = Converter.from_table(source)
        source["编"] = "編"
        assert cc.convert("编") == "编"

    def test_fields_frozen(self):
        """Test attributes can not be reassigned."""
        cc = Converter.from_table({"开": "開"})
        with pytest.raises(AttributeError):
            cc.bounds = None

    def test_hashable(self):
        """Test converters can be used as set members and dict keys."""
        cc = Converter.from_table({"开": "開"})
        other = Converter.from_table({"开": "開"})
        assert isinstance(hash(cc), int)
        assert len({cc, other, cc}) == 2
        cache = {cc: "s2t"}
        assert cache[cc] == "s2t"
        assert cc == cc
        assert cc != other

    def test_concurrent_convert(self):
        """Test one converter shared by many threads."""
        cc = Converter.from_table({"开源": "開源", "编程语言": "編程語言", "个": "個"})
        text = "一个开源的编程语言，" * 20
        expected = "一個開源的編程語言，" * 20

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(cc.convert, [text] * 400))

        assert all(r == expected for r in results)


class TestNewConverter:
    """Tests for building converters from a data root."""

    def test_from_data_root(self, data_root):
        """Test building from config/ and dictionary/."""
        cc = new_converter("s2t", data_root)
        assert cc.name == "test s2t"
        assert cc.convert("开源的编程语言") == "開源的編程語言"
        assert cc.bounds.max_key_len == 4
        assert cc.bounds.min_key_len == 1

    def test_report(self, data_root):
        """Test the load report is attached."""
        cc = new_converter("s2t", data_root)
        assert cc.report.files_read == ["STPhrases.txt", "STCharacters.txt"]

    def test_missing_profile(self, data_root):
        """Test an unknown profile raises DictFileNotFound."""
        with pytest.raises(DictFileNotFound):
            new_converter("nope", data_root)

    def test_missing_dictionary(self, tmp_path):
        """Test a missing dictionary aborts construction."""
        root = write_data_root(
            tmp_path,
            profiles={"broken": profile_json("broken", leaf("a.txt"), leaf("gone.txt"))},
            dictionaries={"a.txt": "开\t開\n"},
        )
        with pytest.raises(DictFileNotFound):
            new_converter("broken", root)

    def test_malformed_profile(self, tmp_path):
        """Test an invalid profile raises MalformedConfig."""
        root = write_data_root(tmp_path, profiles={}, dictionaries={})
        (root / "config" / "bad.json").write_text("{", encoding="utf-8")
        with pytest.raises(MalformedConfig):
            new_converter("bad", root)

    def test_load_from_profile(self, data_root):
        """Test load() with an already parsed profile."""
        profile = ConversionProfile.from_dict(
            profile_json("chars only", leaf("STCharacters.txt"))
        )
        cc = load(profile, data_root)
        assert cc.convert("开源") == "開源"
        assert "开源" not in cc

    def test_env_data_dir(self, data_root, monkeypatch):
        """Test ZHCHAIN_DATA_DIR selects the data root."""
        monkeypatch.setenv("ZHCHAIN_DATA_DIR", str(data_root))
        cc = new_converter("s2t")
        assert cc.name == "test s2t"


class TestBundledData:
    """Tests against the data shipped with the package."""

    def test_s2t_demo(self, monkeypatch):
        """Test the bundled s2t profile on a mixed sentence."""
        monkeypatch.delenv("ZHCHAIN_DATA_DIR", raising=False)
        cc = new_converter("s2t")
        assert cc.convert(DEMO_S) == DEMO_T

    def test_t2s_demo(self, monkeypatch):
        """Test the bundled t2s profile reverses the demo."""
        monkeypatch.delenv("ZHCHAIN_DATA_DIR", raising=False)
        cc = new_converter("t2s")
        assert cc.convert(DEMO_T) == DEMO_S

    def test_t2s_phrase_protects_character(self, monkeypatch):
        """Test a phrase entry keeps a character from converting."""
        monkeypatch.delenv("ZHCHAIN_DATA_DIR", raising=False)
        cc = new_converter("t2s")
        assert cc.convert("乾隆年間很乾燥") == "乾隆年間很干燥"

    def test_s2t_stable_on_output(self, monkeypatch):
        """Test s2t on its own output is a no-op."""
        monkeypatch.delenv("ZHCHAIN_DATA_DIR", raising=False)
        cc = new_converter("s2t")
        assert cc.convert(DEMO_T) == DEMO_T
