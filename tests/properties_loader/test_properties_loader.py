import pytest
import logging
from pathlib import Path
from unittest.mock import patch

from modules.properties_loader import PropertiesLoader, load_properties, parse_properties
from utils.exceptions import ConfigurationError


@pytest.fixture
def loader():
    return PropertiesLoader()


@pytest.fixture
def write_props(tmp_path):
    """Writes text to key.properties and returns its path."""
    def _write(text: str, name: str = "key.properties") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# --- Loading ---

def test_missing_file_returns_empty_map(loader, tmp_path):
    config_map = loader.load(tmp_path / "does_not_exist.properties")
    assert dict(config_map) == {}


def test_directory_is_treated_as_absent(loader, tmp_path):
    assert len(loader.load(tmp_path)) == 0


def test_loads_signing_keys(loader, write_props):
    path = write_props("storeFile=a\nstorePassword=b\nkeyAlias=c\nkeyPassword=d")
    assert dict(loader.load(path)) == {
        "storeFile": "a",
        "storePassword": "b",
        "keyAlias": "c",
        "keyPassword": "d",
    }


def test_loading_twice_is_idempotent(loader, write_props):
    path = write_props("storeFile=upload.jks\nkeyAlias=upload\n")
    assert dict(loader.load(path)) == dict(loader.load(path))


def test_loaded_map_is_read_only(loader, write_props):
    config_map = loader.load(write_props("keyAlias=upload"))
    with pytest.raises(TypeError):
        config_map["keyAlias"] = "other"


def test_load_properties_shortcut(write_props):
    assert load_properties(write_props("keyAlias=upload"))["keyAlias"] == "upload"


def test_undecodable_file_raises_configuration_error(tmp_path):
    path = tmp_path / "key.properties"
    path.write_bytes(b"keyAlias=\xff\xfe\n")
    with pytest.raises(ConfigurationError, match="Cannot decode"):
        PropertiesLoader(encoding="utf-8").load(path)


def test_latin1_encoding(tmp_path):
    path = tmp_path / "key.properties"
    path.write_bytes("keyAlias=caf\xe9\n".encode("latin-1"))
    assert PropertiesLoader(encoding="latin-1").load(path)["keyAlias"] == "caf\u00e9"


def test_utf8_byte_order_mark_is_ignored(tmp_path):
    path = tmp_path / "key.properties"
    path.write_bytes("storeFile=a\nstorePassword=b\nkeyAlias=c\nkeyPassword=d\n".encode("utf-8-sig"))

    config_map = PropertiesLoader().load(path)
    assert "storeFile" in config_map
    assert config_map["storeFile"] == "a"
    assert not any(key.startswith("\ufeff") for key in config_map)


def test_os_error_is_wrapped(loader, write_props):
    path = write_props("keyAlias=upload")
    with patch("builtins.open", side_effect=PermissionError("denied")):
        with pytest.raises(ConfigurationError, match="Properties load failed: denied"):
            loader.load(path)


# --- Parsing ---

def test_comments_and_blank_lines_are_ignored():
    text = "# comment\n\n   \n! other comment\nkeyAlias=upload\n  # indented comment\n"
    assert parse_properties(text) == {"keyAlias": "upload"}


def test_colon_and_whitespace_separators():
    text = "storeFile: upload.jks\nkeyAlias upload\nkeyPassword  =  secret\n"
    assert parse_properties(text) == {
        "storeFile": "upload.jks",
        "keyAlias": "upload",
        "keyPassword": "secret",
    }


def test_whitespace_is_trimmed_around_key_and_value():
    assert parse_properties("   storePassword =  hunter2   \n") == {"storePassword": "hunter2"}


def test_value_may_contain_separators():
    assert parse_properties("storeFile=C:/keys/a=b.jks") == {"storeFile": "C:/keys/a=b.jks"}


def test_last_duplicate_wins():
    assert parse_properties("keyAlias=first\nkeyAlias=second\n") == {"keyAlias": "second"}


def test_line_continuation():
    text = "storeFile=/home/dev/\\\n    keys/upload.jks\nkeyAlias=upload\n"
    assert parse_properties(text) == {
        "storeFile": "/home/dev/keys/upload.jks",
        "keyAlias": "upload",
    }


def test_escaped_backslash_does_not_continue():
    text = "storeFile=C:\\\\\nkeyAlias=upload\n"
    assert parse_properties(text) == {"storeFile": "C:\\", "keyAlias": "upload"}


def test_trailing_backslash_on_last_line_is_dropped():
    assert parse_properties("keyAlias=upload\\") == {"keyAlias": "upload"}


def test_escapes_are_decoded():
    text = "key\\=with\\:seps=tab\\there\\u0041\nspace\\ key=x\\ \n"
    assert parse_properties(text) == {
        "key=with:seps": "tab\there\u0041",
        "space key": "x ",
    }


def test_crlf_line_endings():
    assert parse_properties("keyAlias=upload\r\nkeyPassword=pw\r\n") == {
        "keyAlias": "upload",
        "keyPassword": "pw",
    }


def test_key_without_value_maps_to_empty_string():
    assert parse_properties("keyAlias\n") == {"keyAlias": ""}


def test_malformed_lines_are_skipped(caplog):
    text = "=orphan\nbad=\\u12\nkeyAlias=upload\n"
    with caplog.at_level(logging.WARNING):
        result = parse_properties(text)

    assert result == {"keyAlias": "upload"}
    assert "line 1" in caplog.text
    assert "line 2" in caplog.text
