from kubetail.core.config import DEFAULTS, TailConfig


def test_defaults_without_file_or_env(tmp_path):
    values = TailConfig(tmp_path / "missing.yaml", environ={}).load()
    assert values == DEFAULTS


def test_yaml_file_overrides_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "namespace: shop\n"
        "colored-output: pod\n"
        "skip_colors: [7, 8]\n"
        "timestamps: true\n"
    )
    values = TailConfig(config_file, environ={}).load()
    assert values["namespace"] == "shop"
    assert values["colored_output"] == "pod"
    assert values["skip_colors"] == "7,8"
    assert values["timestamps"] is True


def test_environment_overrides_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("since: 1h\ntail: 100\n")
    environ = {
        "KUBETAIL_SINCE": "30s",
        "KUBETAIL_TAIL": "5",
        "KUBETAIL_LINE_BUFFERED": "true",
        "KUBETAIL_JQ_SELECTOR": ".message",
    }
    values = TailConfig(config_file, environ=environ).load()
    assert values["since"] == "30s"
    assert values["tail"] == 5
    assert values["line_buffered"] is True
    assert values["jq"] == ".message"


def test_bad_values_are_ignored(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("colour: red\n")
    values = TailConfig(config_file, environ={"KUBETAIL_TAIL": "lots"}).load()
    assert values == DEFAULTS
    err = capsys.readouterr().err
    assert "colour" in err
    assert "KUBETAIL_TAIL" in err


def test_invalid_yaml_falls_back(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("namespace: [unclosed\n")
    assert TailConfig(config_file, environ={}).load() == DEFAULTS
    assert "Failed to load" in capsys.readouterr().err


def test_yaml_values_take_the_option_type(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "since: 10\n"
        "tail: '100'\n"
        "colored-output: false\n"
        "follow: false\n"
        "line-buffered: 'yes'\n"
        "palette_size: lots\n"
    )
    values = TailConfig(config_file, environ={}).load()
    assert values["since"] == "10"
    assert values["tail"] == 100
    assert values["colored_output"] == "false"
    assert values["follow"] == "false"
    assert values["line_buffered"] is True
    assert values["palette_size"] == 256
    assert "palette_size" in capsys.readouterr().err
