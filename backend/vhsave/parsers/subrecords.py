"""
Player sub-record codecs: inventory, food and skills

Inventory and skills carry their own local format version at the start of
the record; food entries are gated by the enclosing player data version.
"""
from typing import List

from ..models.player_models import Food, Item, Skill
from .versioning import FieldSpec, primitive, read_fields, since, until
from .zpackage import ZPackage, decoding

_ITEM_MIN_SIZE = 1 + 4 + 4 + 8 + 1
_SKILL_MIN_SIZE = 4 + 4
_FOOD_MIN_SIZE = 1 + 4


# ============================================================
# Inventory
# ============================================================

# Gated by the inventory's own version
ITEM_FIELDS = (
    FieldSpec('name', primitive(ZPackage.read_string), label='item name'),
    FieldSpec('stack', primitive(ZPackage.read_int), label='stack size'),
    FieldSpec('durability', primitive(ZPackage.read_single)),
    FieldSpec('position', primitive(ZPackage.read_vector2i), label='grid position'),
    FieldSpec('equipped', primitive(ZPackage.read_bool), label='equipped flag'),
    FieldSpec('quality', primitive(ZPackage.read_int), since(101)),
    FieldSpec('variant', primitive(ZPackage.read_int), since(102)),
    FieldSpec('crafter_id', primitive(ZPackage.read_long), since(103), label='crafter id'),
    FieldSpec('crafter_name', primitive(ZPackage.read_string), since(103), label='crafter name'),
)


def read_inventory(pkg: ZPackage, player_version: int = 0) -> List[Item]:
    """Read an inventory record (local version, count, items)"""
    with decoding('inventory version'):
        version = pkg.read_int()
    with decoding('item count'):
        count = pkg.read_count(element_size=_ITEM_MIN_SIZE)

    items = []
    for index in range(count):
        with decoding(f"item #{index}"):
            items.append(Item(**read_fields(pkg, version, ITEM_FIELDS)))
    return items


# ============================================================
# Food
# ============================================================

# Gated by the player data version
FOOD_FIELDS = (
    FieldSpec('name', primitive(ZPackage.read_string), label='food name'),
    FieldSpec('health', primitive(ZPackage.read_single), label='food health'),
    FieldSpec('stamina', primitive(ZPackage.read_single), since(16), label='food stamina'),
)

LEGACY_FOOD_FIELDS = (
    (FieldSpec(None, primitive(ZPackage.read_string), label='legacy food name'),)
    + tuple(FieldSpec(None, primitive(ZPackage.read_single), label='legacy food value') for _ in range(6))
    + (FieldSpec(None, primitive(ZPackage.read_single), since(13), label='legacy food value'),)
)


def read_food(pkg: ZPackage, player_version: int) -> Food:
    return Food(**read_fields(pkg, player_version, FOOD_FIELDS))


def _skip_legacy_food(pkg: ZPackage, player_version: int):
    read_fields(pkg, player_version, LEGACY_FOOD_FIELDS)


FOOD_ENTRY_FIELDS = (
    FieldSpec('food', read_food, since(14), label='food'),
    FieldSpec(None, _skip_legacy_food, until(14), label='legacy food'),
)


def read_foods(pkg: ZPackage, player_version: int) -> List[Food]:
    """Read the food list; entries older than version 14 are skipped"""
    with decoding('food count'):
        count = pkg.read_count(element_size=_FOOD_MIN_SIZE)

    foods = []
    for index in range(count):
        with decoding(f"food #{index}"):
            entry = read_fields(pkg, player_version, FOOD_ENTRY_FIELDS)
        if 'food' in entry:
            foods.append(entry['food'])
    return foods


# ============================================================
# Skills
# ============================================================

# Gated by the skill record's own version
SKILL_FIELDS = (
    FieldSpec('type', primitive(ZPackage.read_int), label='skill type'),
    FieldSpec('level', primitive(ZPackage.read_single), label='skill level'),
    FieldSpec('accumulator', primitive(ZPackage.read_single), since(2), label='skill accumulator'),
)


def read_skills(pkg: ZPackage, player_version: int = 0) -> List[Skill]:
    """Read a skill record (local version, count, skills)"""
    with decoding('skills version'):
        version = pkg.read_int()
    with decoding('skill count'):
        count = pkg.read_count(element_size=_SKILL_MIN_SIZE)

    skills = []
    for index in range(count):
        with decoding(f"skill #{index}"):
            skills.append(Skill(**read_fields(pkg, version, SKILL_FIELDS)))
    return skills
