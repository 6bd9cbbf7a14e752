"""Tests for configuration and representation types."""

import pytest

from treefilelib import InvalidTypeError, RepresentationType, TreeFileConfig


class TestRepresentationType:

    def test_values(self):
        assert RepresentationType.DIR == "dir"
        assert RepresentationType.FILE == "file"
        assert str(RepresentationType.DIR) == "dir"

    @pytest.mark.parametrize("value,expected", [
        ("dir", RepresentationType.DIR),
        ("file", RepresentationType.FILE),
        (RepresentationType.FILE, RepresentationType.FILE),
    ])
    def test_parse(self, value, expected):
        assert RepresentationType.parse(value) is expected

    def test_parse_invalid(self):
        with pytest.raises(InvalidTypeError) as excinfo:
            RepresentationType.parse("directory")

        assert isinstance(excinfo.value, ValueError)
        assert excinfo.value.value == "directory"


class TestTreeFileConfig:

    def test_defaults(self):
        config = TreeFileConfig()

        assert config.readonly is False
        assert config.preload == 0
        assert config.not_found is None
        assert config.skip is None
        assert config.lock_name == ".lock"

    def test_preload_none_means_lazy(self):
        assert TreeFileConfig(preload=None).preload == 0

    def test_preload_unbounded(self):
        assert TreeFileConfig(preload=-1).preload == -1

    def test_preload_below_minus_one(self):
        with pytest.raises(ValueError):
            TreeFileConfig(preload=-2)

    def test_empty_lock_name(self):
        with pytest.raises(ValueError):
            TreeFileConfig(lock_name="")

    @pytest.mark.parametrize("option", ["not_found", "skip"])
    def test_callbacks_must_be_callable(self, option):
        with pytest.raises(TypeError):
            TreeFileConfig(**{option: "nope"})

    def test_from_options(self):
        assert TreeFileConfig.from_options(readonly=True).readonly is True

    def test_from_options_overrides_config(self):
        base = TreeFileConfig(readonly=True, preload=2)
        config = TreeFileConfig.from_options(base, preload=0)

        assert config.readonly is True
        assert config.preload == 0
        assert base.preload == 2

    def test_from_options_without_overrides(self):
        base = TreeFileConfig()
        assert TreeFileConfig.from_options(base) is base


class TestShouldSkip:

    @pytest.mark.parametrize("name", [".hidden", ".lock", "CVS"])
    def test_builtin(self, tmp_path, name):
        assert TreeFileConfig().should_skip(name, str(tmp_path / name))

    def test_regular_entries(self, tmp_path):
        config = TreeFileConfig()

        assert not config.should_skip("cvs", str(tmp_path / "cvs"))
        assert not config.should_skip("a.b", str(tmp_path / "a.b"))

    def test_symlink(self, tmp_path):
        (tmp_path / "target").write_text("1")
        (tmp_path / "link").symlink_to(tmp_path / "target")

        assert TreeFileConfig().should_skip("link", str(tmp_path / "link"))

    def test_callback(self, tmp_path):
        config = TreeFileConfig(skip=lambda name, path: name.startswith("tmp"))

        assert config.should_skip("tmp1", str(tmp_path / "tmp1"))
        assert not config.should_skip("keep", str(tmp_path / "keep"))
