import logging

from carcassonne_ai.config import EngineConfig, MatchConfig, env_layer, load_engine_config, merge_layers, read_config_file

def test_merge_layers_nested():
    a = {"match": {"seed": 1, "bots": {"White": "random"}}, "engine": {"meeples_per_player": 7}}
    b = {"match": {"bots": {"Black": "greedy"}}, "engine": {"tiles_path": "x.yaml"}}
    c = merge_layers(a, b)
    assert c["match"]["seed"] == 1 and c["match"]["bots"] == {"White": "random", "Black": "greedy"}
    assert c["engine"]["meeples_per_player"] == 7 and c["engine"]["tiles_path"] == "x.yaml"
    # inputs are not modified
    assert a["match"]["bots"] == {"White": "random"}

def test_merge_layers_replaces_scalars_and_skips_missing():
    assert merge_layers({"match": {"seed": 1}}, None, {"match": 3}) == {"match": 3}

def test_env_layer_parsing(monkeypatch):
    monkeypatch.setenv("CARCASSONNE_AI__ENGINE__MEEPLES_PER_PLAYER", "5")
    monkeypatch.setenv("CARCASSONNE_AI__MATCH__BOT_PARAMS__MCTS__EXPLORATION", "1.5")
    monkeypatch.setenv("CARCASSONNE_AI__MATCH__RECORD", "out.replay")
    d = env_layer()
    assert d["engine"]["meeples_per_player"] == 5
    assert d["match"]["bot_params"]["mcts"]["exploration"] == 1.5
    assert d["match"]["record"] == "out.replay"

def test_env_layer_keeps_structured_values_as_text():
    d = env_layer("X__", {"X__MATCH__RECORD": "[1, 2]", "X__ENGINE__FLAG": "true", "OTHER": "1"})
    assert d == {"match": {"record": "[1, 2]"}, "engine": {"flag": True}}

def test_yaml_and_json_files_merge_in_order(tmp_path):
    first = tmp_path / "base.yaml"
    first.write_text("engine:\n  meeples_per_player: 6\nmatch:\n  seed: 3\n", encoding="utf-8")
    second = tmp_path / "override.json"
    second.write_text('{"match": {"seed": 9}}', encoding="utf-8")
    cfg = merge_layers(read_config_file(str(first)), read_config_file(str(second)))
    assert cfg == {"engine": {"meeples_per_player": 6}, "match": {"seed": 9}}

def test_non_mapping_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="carcassonne_ai.config"):
        assert read_config_file(str(path)) == {}
    assert "not a mapping" in caplog.text

def test_load_engine_config_layers(tmp_path, monkeypatch, caplog):
    path = tmp_path / "cfg.yaml"
    path.write_text("engine:\n  meeples_per_player: 6\n  colour: red\nmatch:\n  seed: 3\n", encoding="utf-8")
    monkeypatch.setenv("CARCASSONNE_AI__MATCH__SEED", "4")
    with caplog.at_level(logging.WARNING, logger="carcassonne_ai.config"):
        engine, match = load_engine_config([str(path)], overrides={"match": {"bots": {"White": "mcts"}}})
    assert isinstance(engine, EngineConfig) and isinstance(match, MatchConfig)
    assert engine.meeples_per_player == 6
    assert match.seed == 4
    assert match.bots == {"White": "mcts"}
    assert "colour" in caplog.text

def test_section_from_dict():
    assert MatchConfig.from_dict({"seed": 2}) == MatchConfig(seed=2)
    assert EngineConfig.from_dict(None) == EngineConfig()

def test_defaults_without_files(monkeypatch):
    engine, match = load_engine_config(prefix="CARCASSONNE_AI_TEST_UNUSED__")
    assert engine == EngineConfig()
    assert match.bots == {"White": "random", "Black": "greedy"}
