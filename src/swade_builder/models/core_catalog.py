"""Bundled core-rules catalog in the creator's asset-bundle shape.

Catalog.defaults() loads this so the engine and its tests work without
external JSON assets. Hosts with their own assets should call
Catalog.from_dict() on those instead.
"""

from typing import Any


def _skill(attribute: str, description: str) -> dict[str, str]:
    return {"attribute": attribute, "description": description}


def _hindrance(severity: str, description: str) -> dict[str, Any]:
    return {"type": severity, "points": 2 if severity == "major" else 1, "description": description}


def _edge(category: str, requirements: str, description: str) -> dict[str, str]:
    return {"type": category, "requirements": requirements, "description": description}


_SKILLS: dict[str, dict[str, str]] = {
    "Academics": _skill("smarts", "Knowledge of liberal arts, social sciences, and history"),
    "Athletics": _skill("agility", "Climbing, jumping, swimming, throwing, and catching"),
    "Battle": _skill("smarts", "Strategy, tactics, and mass combat"),
    "Boating": _skill("agility", "Sailing and piloting watercraft"),
    "Common Knowledge": _skill("smarts", "General knowledge of a character's world"),
    "Driving": _skill("agility", "Operating ground vehicles"),
    "Electronics": _skill("smarts", "Using and repairing electronic devices"),
    "Faith": _skill("spirit", "Arcane skill for Arcane Background (Miracles)"),
    "Fighting": _skill("agility", "Attacking in hand-to-hand combat"),
    "Focus": _skill("spirit", "Arcane skill for Arcane Background (Gifted)"),
    "Gambling": _skill("smarts", "Skill and familiarity with games of chance"),
    "Hacking": _skill("smarts", "Coding and breaking into computer systems"),
    "Healing": _skill("smarts", "Treating wounds and diagnosing illness"),
    "Intimidation": _skill("spirit", "A character's ability to threaten others"),
    "Language": _skill("smarts", "Speaking and reading a foreign language"),
    "Notice": _skill("smarts", "General awareness and perception"),
    "Occult": _skill("smarts", "Knowledge of supernatural events and creatures"),
    "Performance": _skill("spirit", "Singing, dancing, acting, and public speaking"),
    "Persuasion": _skill("spirit", "Convincing others to do what you want"),
    "Piloting": _skill("agility", "Flying aircraft and spacecraft"),
    "Psionics": _skill("smarts", "Arcane skill for Arcane Background (Psionics)"),
    "Repair": _skill("smarts", "Fixing mechanical and electrical gadgets"),
    "Research": _skill("smarts", "Finding information in libraries and archives"),
    "Riding": _skill("agility", "Riding horses and other mounts"),
    "Science": _skill("smarts", "Knowledge of scientific fields"),
    "Shooting": _skill("agility", "Attacking with ranged weapons"),
    "Spellcasting": _skill("smarts", "Arcane skill for Arcane Background (Magic)"),
    "Stealth": _skill("agility", "Sneaking and hiding"),
    "Survival": _skill("smarts", "Finding food, water, and shelter; tracking"),
    "Taunt": _skill("smarts", "Insulting or belittling an opponent"),
    "Thievery": _skill("agility", "Picking locks and pockets, disarming traps"),
    "Weird Science": _skill("smarts", "Arcane skill for Arcane Background (Weird Science)"),
}

_CORE_SKILLS = ["Athletics", "Common Knowledge", "Notice", "Persuasion", "Stealth"]

_HINDRANCES: dict[str, dict[str, Any]] = {
    "All Thumbs": _hindrance("minor", "-2 to use mechanical or electrical devices"),
    "Anemic": _hindrance("minor", "-2 to resist Fatigue"),
    "Arrogant": _hindrance("major", "Likes to dominate opponents and challenge the most powerful foe"),
    "Bad Luck": _hindrance("major", "One less Benny per session"),
    "Big Mouth": _hindrance("minor", "Unable to keep secrets"),
    "Bloodthirsty": _hindrance("major", "Never takes prisoners"),
    "Cautious": _hindrance("minor", "Plans extensively and avoids risk"),
    "Clueless": _hindrance("major", "-1 to Common Knowledge and Notice rolls"),
    "Code of Honor": _hindrance("major", "Keeps their word and acts like a gentleman"),
    "Curious": _hindrance("major", "Wants to know about everything"),
    "Delusional (Minor)": _hindrance("minor", "Believes something strange"),
    "Elderly": _hindrance("major", "-1 Pace, -1 to Agility, Strength, and Vigor rolls"),
    "Greedy (Minor)": _hindrance("minor", "Obsessed with wealth"),
    "Hard of Hearing": _hindrance("minor", "-4 to Notice sounds"),
    "Hesitant": _hindrance("minor", "Draws two Action Cards and takes the lowest"),
    "Heroic": _hindrance("major", "Always helps those in need"),
    "Loyal": _hindrance("minor", "Never leaves a friend behind"),
    "Mean": _hindrance("minor", "-1 to Persuasion rolls"),
    "Overconfident": _hindrance("major", "Believes they can do anything"),
    "Pacifist (Minor)": _hindrance("minor", "Fights only in self-defense"),
    "Pacifist (Major)": _hindrance("major", "Never harms living creatures"),
    "Poverty": _hindrance("minor", "Half starting funds; always broke"),
    "Quirk": _hindrance("minor", "Minor but persistent foible"),
    "Slow (Minor)": _hindrance("minor", "-1 Pace, reduce running die one step"),
    "Slow (Major)": _hindrance("major", "-2 Pace, running die d4"),
    "Small": _hindrance("minor", "Size -1, -1 Toughness"),
    "Stubborn": _hindrance("minor", "Wants their way and never admits a mistake"),
    "Ugly (Minor)": _hindrance("minor", "-1 to Persuasion rolls"),
    "Vengeful (Minor)": _hindrance("minor", "Holds a grudge"),
    "Wanted (Minor)": _hindrance("minor", "Wanted by the authorities"),
    "Yellow": _hindrance("major", "-2 to Fear checks and resisting Intimidation"),
    "Young": _hindrance("minor", "Fewer attribute and skill points, +1 Benny"),
}

_EDGE_CATEGORIES: dict[str, str] = {
    "background": "Background Edges",
    "combat": "Combat Edges",
    "leadership": "Leadership Edges",
    "power": "Power Edges",
    "professional": "Professional Edges",
    "social": "Social Edges",
    "weird": "Weird Edges",
    "legendary": "Legendary Edges",
}

_EDGES: dict[str, dict[str, str]] = {
    # Background
    "Alertness": _edge("background", "Novice", "+2 to Notice rolls"),
    "Ambidextrous": _edge("background", "Novice, Agility d8+", "Ignore -2 penalty for off-hand"),
    "Arcane Background (Gifted)": _edge("background", "Novice", "Innate supernatural powers"),
    "Arcane Background (Magic)": _edge("background", "Novice", "Wizards and sorcerers"),
    "Arcane Background (Miracles)": _edge("background", "Novice", "Holy warriors and priests"),
    "Arcane Background (Psionics)": _edge("background", "Novice", "Mental powers"),
    "Arcane Background (Weird Science)": _edge("background", "Novice", "Strange devices"),
    "Aristocrat": _edge("background", "Novice", "+2 to Common Knowledge and networking with the upper class"),
    "Attractive": _edge("background", "Novice, Vigor d6+", "+1 to Performance and Persuasion rolls"),
    "Very Attractive": _edge("background", "Novice, Attractive", "+2 to Performance and Persuasion rolls"),
    "Berserk": _edge("background", "Novice", "Rage after being Shaken or Wounded"),
    "Brave": _edge("background", "Novice, Spirit d6+", "+2 to Fear checks"),
    "Brawny": _edge("background", "Novice, Strength d6+, Vigor d6+", "+1 Toughness, carry more"),
    "Brute": _edge("background", "Novice, Strength d6+, Vigor d6+", "Link Athletics to Strength"),
    "Charismatic": _edge("background", "Novice, Spirit d8+", "Free reroll on Persuasion"),
    "Elan": _edge("background", "Novice, Spirit d8+", "+2 when spending a Benny on a trait roll"),
    "Fame": _edge("background", "Novice", "+1 Persuasion when recognized, double fee"),
    "Famous": _edge("background", "Seasoned, Fame", "+2 Persuasion when recognized, 5x fee"),
    "Fast Healer": _edge("background", "Novice, Vigor d8+", "+2 to natural healing rolls"),
    "Fleet-Footed": _edge("background", "Novice, Agility d6+", "+2 Pace, increase running die one step"),
    "Linguist": _edge("background", "Novice, Smarts d6+", "Character has d4 in several languages"),
    "Luck": _edge("background", "Novice", "+1 Benny per session"),
    "Great Luck": _edge("background", "Novice, Luck", "+2 Bennies per session"),
    "Quick": _edge("background", "Novice, Agility d8+", "Discard and redraw Action Cards of 5 or lower"),
    "Rich": _edge("background", "Novice", "Three times starting funds"),
    "Filthy Rich": _edge("background", "Novice, Rich", "Five times starting funds"),
    # Combat
    "Assassin": _edge("combat", "Novice, Agility d8+, Fighting d6+, Stealth d8+", "+2 damage to unaware foes"),
    "Block": _edge("combat", "Seasoned, Fighting d8+", "+1 Parry"),
    "Improved Block": _edge("combat", "Veteran, Block", "+2 Parry"),
    "Brawler": _edge("combat", "Novice, Strength d8+, Vigor d8+", "+1 Toughness, unarmed damage Str+d4"),
    "Combat Reflexes": _edge("combat", "Seasoned", "+2 to recover from Shaken"),
    "Dodge": _edge("combat", "Seasoned, Agility d8+", "-2 to be hit by ranged attacks"),
    "First Strike": _edge("combat", "Novice, Agility d8+", "Free Fighting attack against one foe moving adjacent"),
    "Frenzy": _edge("combat", "Seasoned, Fighting d8+", "Extra Fighting die once per turn"),
    "Marksman": _edge("combat", "Seasoned, Athletics d8+ or Shooting d8+", "Ignore up to 2 points of penalties"),
    "Nerves of Steel": _edge("combat", "Novice, Vigor d8+", "Ignore one level of Wound penalties"),
    "Quick Draw": _edge("combat", "Novice, Agility d8+", "Draw a weapon as a free action"),
    "Trademark Weapon": _edge("combat", "Novice, Fighting d8+ or Shooting d8+", "+1 to attack rolls with a specific weapon"),
    # Leadership
    "Command": _edge("leadership", "Novice, Smarts d6+", "+1 to Extras' Shaken recovery in command range"),
    # Power
    "Arcane Resistance": _edge("power", "Novice, Spirit d8+", "+2 to resist powers, -2 arcane damage"),
    "New Powers": _edge("power", "Novice, Arcane Background (any)", "Learn two new powers"),
    "Power Points": _edge("power", "Novice, Arcane Background (any)", "+5 Power Points"),
    "Channeling": _edge("power", "Seasoned, Arcane Background (any)", "Reduce Power Point cost by 1 on a raise"),
    "Concentration": _edge("power", "Seasoned, Arcane Background (any)", "Double duration of non-instant powers"),
    # Professional
    "Ace": _edge("professional", "Novice, Agility d8+", "Ignore unstable platform penalties"),
    "Acrobat": _edge("professional", "Novice, Agility d8+, Athletics d8+", "Free reroll on acrobatic Athletics attempts"),
    "Investigator": _edge("professional", "Novice, Smarts d8+, Research d8+", "+2 to Research and certain Notice rolls"),
    "Jack-of-all-Trades": _edge("professional", "Novice, Smarts d10+", "No -2 for unskilled Smarts-based attempts"),
    "McGyver": _edge("professional", "Novice, Smarts d6+, Repair d6+, Notice d8+", "Improvise temporary gadgets"),
    "Scholar": _edge("professional", "Novice, Research d8+", "+2 to any one knowledge skill"),
    "Thief": _edge("professional", "Novice, Agility d8+, Stealth d6+, Thievery d6+", "+1 to Thievery and urban Stealth"),
    "Woodsman": _edge("professional", "Novice, Spirit d6+, Survival d8+", "+2 to Survival and wilderness Stealth"),
    # Social
    "Humiliate": _edge("social", "Novice, Taunt d8+", "Free reroll when making Taunt tests"),
    # Weird
    "Beast Bond": _edge("weird", "Novice", "Spend Bennies for animal companions"),
    "Champion": _edge("weird", "Novice, Arcane Background (Miracles), Spirit d8+, Fighting d6+", "+2 damage versus supernaturally evil creatures"),
    "Healer": _edge("weird", "Novice, Spirit d8+", "+2 to Healing rolls"),
    # Legendary
    "Followers": _edge("legendary", "Legendary", "Attract five followers"),
}

_ANCESTRIES: dict[str, dict[str, Any]] = {
    "Human": {
        "description": "Adaptable and ambitious",
        "traits": ["Adaptable"],
        "bonuses": {"edges": 1},
    },
    "Dwarf": {
        "description": "Stout folk of the mountains",
        "traits": ["Low Light Vision", "Slow", "Tough"],
        "bonuses": {},
    },
    "Elf": {
        "description": "Graceful and long-lived",
        "traits": ["Agile", "All Thumbs", "Low Light Vision"],
        "bonuses": {},
    },
    "Half-Folk": {
        "description": "Small, lucky, and spirited",
        "traits": ["Small", "Spirited"],
        "bonuses": {},
    },
    "Saurian": {
        "description": "Scaled warriors of the deep swamps",
        "traits": ["Armor +2", "Bite", "Keen Senses"],
        "bonuses": {},
    },
}

CORE_CATALOG: dict[str, Any] = {
    "skills": {"skills": _SKILLS, "coreSkills": _CORE_SKILLS},
    "hindrances": {"hindrances": _HINDRANCES},
    "edges": {"edges": _EDGES, "edgeCategories": _EDGE_CATEGORIES},
    "config": {
        "gameRules": {
            "attributePoints": 5,
            "skillPoints": 12,
            "hindrancePointsMax": 4,
            "hindrancePointsMinorMax": 2,
            "dieTypes": [4, 6, 8, 10, 12],
        },
        "ancestries": _ANCESTRIES,
        "defaultAncestry": "Human",
        "derivedStats": {
            "pace": {"base": 6},
            "parry": {"formula": "2 + (Fighting / 2)", "minimum": 2},
        },
        "startingFunds": {"base": 500, "poverty": 250, "rich": 1500, "filthyRich": 2500},
    },
}
