from app.strategies import DEFAULT_STRATEGY, STRATEGIES, Strategy, get_definition, parse_strategy


def test_parse_strategy_translates_known_keys_only():
    assert parse_strategy("genre") is Strategy.GENRE
    assert parse_strategy(Strategy.YEAR) is Strategy.YEAR
    assert parse_strategy("Genre") is None
    assert parse_strategy("") is None
    assert parse_strategy(None) is None
    assert parse_strategy(3) is None


def test_definitions_cover_every_strategy_once():
    assert [definition.key for definition in STRATEGIES] == list(Strategy)
    assert DEFAULT_STRATEGY is Strategy.HYBRID
    assert get_definition("hybrid").menu_label == "Hybrid (Genre + Rating)"
    assert get_definition("nope") is None
