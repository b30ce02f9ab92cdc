from hint_app.hints import catalog
from hint_app.hints.catalog import HintDefinition, HintGroup


def test_home_group_is_registered_at_import():
    group = catalog.get_group(catalog.HOME_HINTS_ID)

    assert group is catalog.HOME_HINTS
    assert [hint.id for hint in group.hints] == ["home-fear-greed", "home-view-controls", "home-search"]
    assert catalog.get_definition("home-search").icon == "!"
    assert catalog.get_definition("missing") is None


def test_definition_defaults_and_invalid_icon_fallback():
    hint = HintDefinition(id="x", title="X", content="body", icon="new", color="")

    assert hint.priority == 100
    assert hint.icon == "i"
    assert hint.color == catalog.DEFAULT_COLOR
    assert hint.category == "general"


def test_definitions_by_category(monkeypatch):
    monkeypatch.setattr(catalog, "_GROUPS", dict(catalog._GROUPS))
    catalog.register_group(
        HintGroup(
            id="trade",
            name="Trade",
            hints=(HintDefinition(id="trade-ticket", title="Ticket", content="c", category="trade"),),
        )
    )

    assert [h.id for h in catalog.definitions_by_category("trade")] == ["trade-ticket"]
    assert len(catalog.definitions_by_category("home")) == 3
