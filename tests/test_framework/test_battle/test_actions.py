from kcgame.battle import (
    HeroUnit,
    EnemyUnit,
    attack,
    try_ultimate,
    take_damage,
    create_hero_unit,
    create_enemy_unit,
)

def make_hero(level=2, base_attack=20, ult=5, meter=0):
    return HeroUnit(
        name="Hero", max_hp=100, hp=100,
        hero_id="hero_test", key="e", level=level,
        base_attack=base_attack, ult_charge_needed=ult, ult_meter=meter,
    )

def make_enemy(hp=50):
    return EnemyUnit(name="Goblin", max_hp=hp, hp=hp, enemy_id="enemy_goblin", attack_power=5)

def test_attack_is_deterministic():
    hero = make_hero(level=2, base_attack=20)
    enemy = make_enemy(hp=50)

    assert attack(hero, enemy) == 40
    assert enemy.hp == 10
    assert enemy.is_alive

    attack(hero, enemy)
    assert enemy.hp == 0
    assert not enemy.is_alive
    assert hero.ult_meter == 2

def test_meter_is_not_capped():
    hero = make_hero(ult=2)
    enemy = make_enemy(hp=10_000)
    for _ in range(5):
        attack(hero, enemy)

    assert hero.ult_meter == 5

def test_ultimate_gating():
    hero = make_hero(level=2, base_attack=20, ult=5, meter=4)
    enemy = make_enemy(hp=500)

    assert try_ultimate(hero, enemy) == 0
    assert enemy.hp == 500
    assert hero.ult_meter == 4

    attack(hero, enemy)
    assert hero.ult_meter == 5
    assert enemy.hp == 460

    assert try_ultimate(hero, enemy, 1.0) == 20 * 2 * 2
    assert enemy.hp == 380
    assert hero.ult_meter == 0

def test_partial_charge_ultimate():
    hero = make_hero(level=1, base_attack=15, ult=1, meter=1)
    enemy = make_enemy(hp=100)

    assert try_ultimate(hero, enemy, 0.5) == 15
    assert enemy.hp == 85

def test_ultimate_damage_formula_is_unclamped():
    hero = make_hero(level=1, base_attack=20, ult=1, meter=1)
    enemy = make_enemy(hp=100)

    # base_attack x 2 x level x charge_fraction
    assert try_ultimate(hero, enemy, 1.5) == 60
    assert enemy.hp == 40

    hero = make_hero(level=3, base_attack=7, ult=1, meter=1)
    assert try_ultimate(hero, make_enemy(hp=100), 0.25) == int(7 * 2 * 3 * 0.25)

def test_take_damage_floors_at_zero():
    hero = make_hero()

    assert take_damage(hero, 30) == 30
    assert hero.current_hp == 70
    assert take_damage(hero, 500) == 70
    assert hero.hp == 0
    assert not hero.is_alive

def test_units_from_templates(catalog):
    hero = create_hero_unit(catalog.find_hero("hero_azal"), level=3)

    assert hero.level == 3
    assert hero.max_hp == hero.current_hp == 110
    assert hero.base_attack == 26
    assert hero.ult_charge_needed == 5
    assert hero.ult_meter == 0
    assert hero.key == "y"

    enemy = create_enemy_unit(catalog.find_enemy("enemy_orc"))
    assert enemy.hp == enemy.max_hp == 80
    assert enemy.attack_power == 8
    assert enemy.hp_percent == 1.0
