from collections import Counter

from kcgame.progression import (
    GachaService,
    ProgressionEvent,
    compute_leveled_stats,
    draw,
)
from kcgame.save import SaveRecord

def test_first_draw_unlocks(catalog, pick):
    record = SaveRecord()
    persisted = []

    result = draw(record, catalog, persisted.append, pick(1))

    assert result.template.id == "hero_fyra"
    assert result.is_new
    assert result.new_level == 1
    assert result.old_stats is None
    assert result.new_stats == compute_leveled_stats(result.template, 1)
    assert record.unlocked == ["hero_fyra"]
    assert record.levels == {"hero_fyra": 1}
    # Write-through: persisted exactly once, with the mutated record
    assert persisted == [record]

def test_repeat_draw_levels_up(catalog, pick):
    record = SaveRecord(unlocked=["hero_azal"], levels={"hero_azal": 3})
    template = catalog.find_hero("hero_azal")

    result = draw(record, catalog, lambda r: None, pick(0))

    assert not result.is_new
    assert result.new_level == 4
    assert result.old_stats == compute_leveled_stats(template, 3)
    assert result.new_stats == compute_leveled_stats(template, 4)
    assert record.unlocked == ["hero_azal"]
    assert record.levels["hero_azal"] == 4

def test_levels_increase_by_one_per_draw(catalog, pick):
    record = SaveRecord()
    for expected in range(1, 6):
        result = draw(record, catalog, lambda r: None, pick(2))
        assert result.new_level == expected
    assert record.unlocked == ["hero_lucien"]

def test_unlocked_without_level_entry_counts_as_level_zero(catalog, pick):
    record = SaveRecord(unlocked=["hero_azal"])

    result = draw(record, catalog, lambda r: None, pick(0))

    assert not result.is_new
    assert result.new_level == 1
    assert result.old_stats == compute_leveled_stats(result.template, 1)

def test_draw_never_picks_heroes_without_art(catalog, rng):
    record = SaveRecord()
    drawn = Counter(draw(record, catalog, lambda r: None, rng).template.id for _ in range(300))

    assert set(drawn) == {"hero_azal", "hero_fyra", "hero_lucien"}
    assert sum(record.levels.values()) == 300
    assert record.levels == dict(drawn)

def test_unlock_order_is_kept(catalog, pick):
    record = SaveRecord()
    for index in (2, 0, 2, 1):
        draw(record, catalog, lambda r: None, pick(index))

    assert record.unlocked == ["hero_lucien", "hero_azal", "hero_fyra"]
    assert record.levels == {"hero_lucien": 2, "hero_azal": 1, "hero_fyra": 1}

def test_gacha_service_persists_and_publishes(store, save_manager, catalog, event_bus, pick):
    events = []
    event_bus.subscribe(ProgressionEvent.HERO_UNLOCKED, lambda e: events.append(("new", e["hero_id"])), weak=False)
    event_bus.subscribe(ProgressionEvent.HERO_LEVELED, lambda e: events.append(("up", e["level"])), weak=False)
    gacha = GachaService(save_manager, catalog, rng=pick(0), event_bus=event_bus)
    record = save_manager.load()

    gacha.draw(record)
    gacha.draw(record)

    assert events == [("new", "hero_azal"), ("up", 2)]
    assert save_manager.load() == SaveRecord(unlocked=["hero_azal"], levels={"hero_azal": 2})

def test_gacha_draw_survives_persist_failure(catalog, pick):
    from kcengine.resources.storage import MemoryStore
    from kcgame.save import SaveManager

    saves = SaveManager(MemoryStore(capacity=0), catalog)
    record = SaveRecord()

    result = GachaService(saves, catalog, rng=pick(0)).draw(record)

    # In-memory progression still applies; only durability is lost
    assert result.is_new
    assert record.levels == {"hero_azal": 1}
    assert saves.load() == SaveRecord()
