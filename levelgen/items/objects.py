# levelgen/items/objects.py
"""Item value objects that can be placed on a level.

Every item shares the same cell capabilities: a display glyph with colours, a
``visible`` flag toggled by placement, and a ``displaced`` slot that holds the
cell the item was dropped onto.  Construction helpers that need randomness
(``new_potion``, ``new_scroll``) take the level's ``GameRNG`` so that each
placement rolls its own type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict

from game_rng import GameRNG
from levelgen.constants import (
    BLANK_GLYPH,
    COLOR_DANGER,
    COLOR_DEFAULT_BG,
    COLOR_DEFAULT_FG,
    COLOR_GOLD,
    COLOR_MAGIC,
    COLOR_WATER,
    CellKind,
    Color,
)


@dataclass
class Item:
    visible: bool = field(default=False, kw_only=True)
    displaced: Any = field(default=None, kw_only=True)

    kind: ClassVar[CellKind] = CellKind.ITEM
    symbol: ClassVar[str] = "?"
    color: ClassVar[Color] = COLOR_DEFAULT_FG
    walkable: ClassVar[bool] = True

    @property
    def glyph(self) -> str:
        return self.symbol if self.visible else BLANK_GLYPH

    @property
    def fg(self) -> Color:
        return self.color

    @property
    def bg(self) -> Color:
        return COLOR_DEFAULT_BG

    @property
    def name(self) -> str:
        return type(self).__name__.lower()


def _with_attribute(name: str, attribute: int) -> str:
    if attribute < 0:
        return f"{name} {attribute}"
    if attribute > 0:
        return f"{name} +{attribute}"
    return name


# --- Equipment ---


class WeaponType(Enum):
    # (display name, base weapon class)
    DAGGER = ("dagger", 3)
    SPEAR = ("spear", 10)
    FLAIL = ("flail", 14)
    BATTLE_AXE = ("battle axe", 17)
    LONG_SWORD = ("long sword", 22)
    TWO_HANDED_SWORD = ("two handed sword", 26)
    SUN_SWORD = ("sunsword", 32)
    SWORD_OF_SLASHING = ("sword of slashing", 30)
    BESSMANS_HAMMER = ("Bessman's flailing hammer", 35)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def base(self) -> int:
        return self.value[1]


@dataclass
class Weapon(Item):
    type: WeaponType
    attribute: int = 0

    symbol: ClassVar[str] = ")"

    @property
    def name(self) -> str:
        return _with_attribute(self.type.label, self.attribute)


class ArmorType(Enum):
    LEATHER = ("leather", 2)
    STUDDED_LEATHER = ("studded leather", 3)
    RING_MAIL = ("ring mail", 5)
    CHAIN_MAIL = ("chain mail", 6)
    SPLINT_MAIL = ("splint mail", 7)
    PLATE_MAIL = ("plate mail", 9)
    PLATE_ARMOR = ("plate armor", 10)
    STAINLESS_PLATE_ARMOR = ("stainless plate armor", 12)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def base(self) -> int:
        return self.value[1]


@dataclass
class Armor(Item):
    type: ArmorType
    attribute: int = 0

    symbol: ClassVar[str] = "["

    @property
    def name(self) -> str:
        return _with_attribute(self.type.label, self.attribute)


@dataclass
class Shield(Item):
    attribute: int = 0

    symbol: ClassVar[str] = "["

    @property
    def name(self) -> str:
        return _with_attribute("shield", self.attribute)


@dataclass
class Belt(Item):
    attribute: int = 0

    symbol: ClassVar[str] = "{"

    @property
    def name(self) -> str:
        return _with_attribute("belt of striking", self.attribute)


class RingType(Enum):
    REGENERATION = "regeneration"
    PROTECTION = "protection"
    STRENGTH = "strength"
    ENERGY = "energy"
    DEXTERITY = "dexterity"
    CLEVERNESS = "cleverness"


@dataclass
class Ring(Item):
    type: RingType
    attribute: int = 0

    symbol: ClassVar[str] = "="
    color: ClassVar[Color] = COLOR_MAGIC

    @property
    def name(self) -> str:
        return _with_attribute(f"ring of {self.type.value}", self.attribute)


# --- Consumables ---


class PotionType(Enum):
    SLEEP = "sleep"
    HEALING = "healing"
    RAISE_LEVEL = "raise level"
    INCREASE_ABILITY = "increase ability"
    WISDOM = "wisdom"
    STRENGTH = "strength"
    CHARISMA = "raise charisma"
    DIZZINESS = "dizziness"
    LEARNING = "learning"
    GOLD_DETECTION = "gold detection"
    MONSTER_DETECTION = "monster detection"
    FORGETFULNESS = "forgetfulness"
    WATER = "water"
    BLINDNESS = "blindness"
    CONFUSION = "confusion"
    HEROISM = "heroism"
    STURDINESS = "sturdiness"
    GIANT_STRENGTH = "giant strength"
    FIRE_RESISTANCE = "fire resistance"
    TREASURE_FINDING = "treasure finding"
    INSTANT_HEALING = "instant healing"
    CURE_DIANTHRORITIS = "cure dianthroritis"
    POISON = "poison"
    SEE_INVISIBLE = "see invisible"


# Relative frequency of each potion when one is generated at random.
# The cure for dianthroritis is never found lying around.
POTION_WEIGHTS: Dict[PotionType, int] = {
    PotionType.SLEEP: 2,
    PotionType.HEALING: 3,
    PotionType.RAISE_LEVEL: 1,
    PotionType.INCREASE_ABILITY: 2,
    PotionType.WISDOM: 2,
    PotionType.STRENGTH: 2,
    PotionType.CHARISMA: 2,
    PotionType.DIZZINESS: 2,
    PotionType.LEARNING: 1,
    PotionType.GOLD_DETECTION: 2,
    PotionType.MONSTER_DETECTION: 2,
    PotionType.FORGETFULNESS: 2,
    PotionType.WATER: 2,
    PotionType.BLINDNESS: 1,
    PotionType.CONFUSION: 1,
    PotionType.HEROISM: 1,
    PotionType.STURDINESS: 1,
    PotionType.GIANT_STRENGTH: 1,
    PotionType.FIRE_RESISTANCE: 1,
    PotionType.TREASURE_FINDING: 3,
    PotionType.INSTANT_HEALING: 2,
    PotionType.CURE_DIANTHRORITIS: 0,
    PotionType.POISON: 2,
    PotionType.SEE_INVISIBLE: 2,
}


@dataclass
class Potion(Item):
    type: PotionType

    symbol: ClassVar[str] = "!"
    color: ClassVar[Color] = COLOR_WATER

    @property
    def name(self) -> str:
        return f"potion of {self.type.value}"


class ScrollType(Enum):
    ENCHANT_ARMOR = "enchant armor"
    ENCHANT_WEAPON = "enchant weapon"
    ENLIGHTENMENT = "enlightenment"
    BLANK_PAPER = "blank paper"
    CREATE_MONSTER = "create monster"
    CREATE_ARTIFACT = "create artifact"
    AGGRAVATE_MONSTERS = "aggravate monsters"
    TIME_WARP = "time warp"
    TELEPORTATION = "teleportation"
    EXPANDED_AWARENESS = "expanded awareness"
    HASTE_MONSTERS = "haste monsters"
    MONSTER_HEALING = "monster healing"
    SPIRIT_PROTECTION = "spirit protection"
    UNDEAD_PROTECTION = "undead protection"
    STEALTH = "stealth"
    MAGIC_MAPPING = "magic mapping"
    HOLD_MONSTERS = "hold monsters"
    GEM_PERFECTION = "gem perfection"
    SPELL_EXTENSION = "spell extension"
    IDENTIFY = "identify"
    REMOVE_CURSE = "remove curse"
    ANNIHILATION = "annihilation"
    PULVERIZATION = "pulverization"
    LIFE_PROTECTION = "life protection"


SCROLL_WEIGHTS: Dict[ScrollType, int] = {
    ScrollType.ENCHANT_ARMOR: 7,
    ScrollType.ENCHANT_WEAPON: 7,
    ScrollType.ENLIGHTENMENT: 6,
    ScrollType.BLANK_PAPER: 5,
    ScrollType.CREATE_MONSTER: 5,
    ScrollType.CREATE_ARTIFACT: 3,
    ScrollType.AGGRAVATE_MONSTERS: 4,
    ScrollType.TIME_WARP: 4,
    ScrollType.TELEPORTATION: 5,
    ScrollType.EXPANDED_AWARENESS: 4,
    ScrollType.HASTE_MONSTERS: 4,
    ScrollType.MONSTER_HEALING: 3,
    ScrollType.SPIRIT_PROTECTION: 3,
    ScrollType.UNDEAD_PROTECTION: 3,
    ScrollType.STEALTH: 3,
    ScrollType.MAGIC_MAPPING: 4,
    ScrollType.HOLD_MONSTERS: 3,
    ScrollType.GEM_PERFECTION: 1,
    ScrollType.SPELL_EXTENSION: 1,
    ScrollType.IDENTIFY: 4,
    ScrollType.REMOVE_CURSE: 3,
    ScrollType.ANNIHILATION: 1,
    ScrollType.PULVERIZATION: 2,
    ScrollType.LIFE_PROTECTION: 1,
}


@dataclass
class Scroll(Item):
    type: ScrollType

    symbol: ClassVar[str] = "?"
    color: ClassVar[Color] = COLOR_MAGIC

    @property
    def name(self) -> str:
        return f"scroll of {self.type.value}"


def new_potion(rng: GameRNG) -> Potion:
    potion_type = rng.weighted_choice(
        list(POTION_WEIGHTS), list(POTION_WEIGHTS.values()), cache_key="potions"
    )
    return Potion(type=potion_type)


def new_scroll(rng: GameRNG) -> Scroll:
    scroll_type = rng.weighted_choice(
        list(SCROLL_WEIGHTS), list(SCROLL_WEIGHTS.values()), cache_key="scrolls"
    )
    return Scroll(type=scroll_type)


# --- Treasure ---


class GemStone(Enum):
    DIAMOND = "diamond"
    RUBY = "ruby"
    EMERALD = "emerald"
    SAPPHIRE = "sapphire"


@dataclass
class Gem(Item):
    stone: GemStone
    value: int

    symbol: ClassVar[str] = "$"
    color: ClassVar[Color] = COLOR_GOLD

    @property
    def name(self) -> str:
        return f"a brilliant {self.stone.value}"


@dataclass
class GoldPile(Item):
    amount: int

    symbol: ClassVar[str] = "*"
    color: ClassVar[Color] = COLOR_GOLD

    @property
    def name(self) -> str:
        return f"{self.amount} gold pieces"


@dataclass
class Chest(Item):
    level: int

    symbol: ClassVar[str] = "C"


# --- Terrain features ---


@dataclass
class Book(Item):
    level: int

    symbol: ClassVar[str] = "B"


@dataclass
class Altar(Item):
    symbol: ClassVar[str] = "A"


@dataclass
class Statue(Item):
    symbol: ClassVar[str] = "&"


@dataclass
class Pit(Item):
    symbol: ClassVar[str] = "P"
    color: ClassVar[Color] = COLOR_DANGER


@dataclass
class Fountain(Item):
    symbol: ClassVar[str] = "F"
    color: ClassVar[Color] = COLOR_WATER


class TrapType(Enum):
    ARROW = "arrow trap"
    TELEPORT = "teleport trap"
    DART = "dart trap"
    DOOR = "trap door"


@dataclass
class Trap(Item):
    type: TrapType

    symbol: ClassVar[str] = "^"
    color: ClassVar[Color] = COLOR_DANGER

    @property
    def name(self) -> str:
        return self.type.value


# --- Unique artifacts ---


class SpecialType(Enum):
    ORB = "orb of dragon slaying"
    SCARAB = "scarab of negate spirit"
    CUBE = "cube of undead control"
    DEVICE = "device of theft prevention"
    AMULET = "amulet of life preservation"


@dataclass
class Special(Item):
    type: SpecialType

    symbol: ClassVar[str] = "~"
    color: ClassVar[Color] = COLOR_MAGIC

    @property
    def name(self) -> str:
        return self.type.value


__all__ = [
    "Item",
    "WeaponType",
    "Weapon",
    "ArmorType",
    "Armor",
    "Shield",
    "Belt",
    "RingType",
    "Ring",
    "PotionType",
    "POTION_WEIGHTS",
    "Potion",
    "ScrollType",
    "SCROLL_WEIGHTS",
    "Scroll",
    "new_potion",
    "new_scroll",
    "GemStone",
    "Gem",
    "GoldPile",
    "Chest",
    "Book",
    "Altar",
    "Statue",
    "Pit",
    "Fountain",
    "TrapType",
    "Trap",
    "SpecialType",
    "Special",
]
