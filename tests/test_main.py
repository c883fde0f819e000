import pytest
import json
import logging

import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def properties_file(tmp_path):
    path = tmp_path / "key.properties"
    path.write_text(
        "storeFile=upload.jks\nstorePassword=s3cret\nkeyAlias=upload\nkeyPassword=k3y\n",
        encoding="utf-8",
    )
    return path


def test_release_build_resolves(properties_file, tmp_path, capsys):
    code = main.main(["--properties", str(properties_file), "--base-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "keyAlias:  upload" in out
    assert str(tmp_path / "upload.jks") in out
    assert "s3cret" not in out
    assert "k3y" not in out


def test_release_build_missing_key_fails(tmp_path, capsys):
    path = tmp_path / "key.properties"
    path.write_text("storeFile=upload.jks\nstorePassword=s\n", encoding="utf-8")

    code = main.main(["--properties", str(path)])

    assert code == 1
    assert f"keyAlias is missing in {path}" in capsys.readouterr().err


def test_release_build_without_file_fails_on_store_file(tmp_path, capsys):
    code = main.main(["--properties", str(tmp_path / "absent.properties")])

    assert code == 1
    assert "storeFile is missing" in capsys.readouterr().err


def test_debug_build_does_not_need_signing(tmp_path, capsys):
    code = main.main(["--properties", str(tmp_path / "absent.properties"), "--build-type", "debug"])

    assert code == 0
    assert "no signing config needed" in capsys.readouterr().out


def test_settings_file_and_verbose(properties_file, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "signing": {"properties_file": str(properties_file), "base_dir": str(tmp_path)},
        "logging": {"colorful_console": False},
    }), encoding="utf-8")

    assert main.main(["--config", str(config_path), "--verbose"]) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_invalid_settings_file(tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    assert main.main(["--config", str(config_path)]) == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_settings_path_is_directory(tmp_path, capsys):
    assert main.main(["--config", str(tmp_path)]) == 1
    err = capsys.readouterr().err
    assert "[ERROR]" in err
    assert "Cannot read" in err
