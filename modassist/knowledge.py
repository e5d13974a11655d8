"""
Built-in knowledge modules.

Entry and module ids are fixed slugs so searches over the built-in set are
reproducible across restarts.
"""

from typing import List

from .models import KnowledgeEntry, ModuleDefinition

BUILTIN_AUTHOR = "Comrade Yelskin"


def _entry(entry_id: str, title: str, content: str, keywords: List[str]) -> KnowledgeEntry:
    return KnowledgeEntry(id=entry_id, title=title, content=content, keywords=keywords)


GENERAL_MODULE = ModuleDefinition(
    id="general-module",
    name="General Modding",
    description="Basics of Fallout 4 modding, installation and load order",
    author=BUILTIN_AUTHOR,
    entries=[
        _entry(
            "what-is-modding",
            "What is modding?",
            "Modding means modifying Fallout 4 by adding, changing, or removing content. "
            "Mods range from simple texture replacements to new quests, items, or gameplay mechanics.",
            ["modding", "basics", "introduction"],
        ),
        _entry(
            "nexus-mods",
            "Nexus Mods",
            "Nexus Mods is the main platform for downloading Fallout 4 mods. It hosts thousands of "
            "community mods and tracks updates, endorsements and your mod collection.",
            ["nexus", "mods", "website", "download", "platform"],
        ),
        _entry(
            "installing-with-vortex",
            "Installing Mods with Vortex",
            "To install mods with Vortex: 1) Install Vortex from Nexus Mods. 2) Set it up for Fallout 4. "
            "3) Use the Mod Manager Download button on Nexus. 4) Install and enable the mod. "
            "5) Deploy your mods to apply the changes.",
            ["install", "vortex", "steps", "installation"],
        ),
        _entry(
            "manual-installation",
            "Manual Mod Installation",
            "For manual installation: 1) Download and extract the archive. 2) Find the Data folder "
            "contents. 3) Copy them into the Fallout 4 Data directory. 4) Enable the plugin in "
            "plugins.txt or through the in-game mod menu.",
            ["manual", "installation", "without", "manager", "data", "folder"],
        ),
        _entry(
            "load-order-basics",
            "Load Order Basics",
            "Load order decides the sequence in which the game loads plugins. Mods loaded later "
            "override conflicting changes from earlier mods. LOOT or the Vortex sorter can build a "
            "stable load order automatically.",
            ["load", "order", "sequence", "loot", "sorting"],
        ),
    ],
)

TOOLS_MODULE = ModuleDefinition(
    id="tools-module",
    name="Tools & Scripting",
    description="Script extender, xEdit and conflict resolution",
    author=BUILTIN_AUTHOR,
    entries=[
        _entry(
            "f4se",
            "F4SE (Fallout 4 Script Extender)",
            "F4SE extends the scripting capabilities of Fallout 4 beyond standard Papyrus. Extract "
            "the files into the Fallout 4 directory and launch the game with f4se_loader.exe. "
            "Many advanced mods require it.",
            ["f4se", "script", "extender", "installation", "advanced"],
        ),
        _entry(
            "fo4edit",
            "Using FO4Edit for Conflict Resolution",
            "FO4Edit (xEdit) shows exactly which records each mod changes. Load your plugins, look "
            "for highlighted conflicts, copy the winning records as override into a new patch file "
            "and save it at the end of the load order.",
            ["fo4edit", "xedit", "conflict", "resolution", "patch"],
        ),
        _entry(
            "papyrus-intro",
            "Introduction to Papyrus Scripting",
            "Papyrus is the scripting language of Fallout 4. Install the Creation Kit, study the "
            "existing game scripts, compile your own with the Papyrus compiler and test thoroughly, "
            "since script errors can break saves.",
            ["papyrus", "scripting", "programming", "creation", "kit"],
        ),
    ],
)

ARMOR_MODULE = ModuleDefinition(
    id="armor-mods-module",
    name="Armor Modifications",
    description="Information about armor modding in Fallout 4",
    author=BUILTIN_AUTHOR,
    category_id="gear",
    entries=[
        _entry(
            "armor-basics",
            "Armor Modding Basics",
            "Armor can be customized at an armor workbench to add damage resistance, radiation "
            "resistance or carrying capacity. Most modifications require the Armorer perk.",
            ["armor", "modding", "basics", "workbench", "armorer", "perk"],
        ),
        _entry(
            "power-armor",
            "Power Armor Modifications",
            "Power Armor pieces are modified at a Power Armor Station: helmets get targeting HUDs, "
            "torsos get jetpacks, arms get hydraulic bracers and legs get calibrated shocks. "
            "Advanced mods need the Science! perk in addition to Armorer.",
            ["power", "armor", "station", "helmet", "torso", "jetpack"],
        ),
        _entry(
            "ballistic-weave",
            "Ballistic Weave",
            "Ballistic Weave lets you upgrade clothing with damage resistance. Unlock it by doing "
            "Railroad missions for P.A.M., then apply it at an armor workbench. Higher tiers unlock "
            "as you progress with the Railroad.",
            ["ballistic", "weave", "railroad", "clothing", "upgrade"],
        ),
    ],
)

WEAPONS_MODULE = ModuleDefinition(
    id="weapon-mods-module",
    name="Weapon Modifications",
    description="Weapon workbench modding and popular weapon packs",
    author=BUILTIN_AUTHOR,
    category_id="gear",
    entries=[
        _entry(
            "weapon-basics",
            "Weapon Modding Basics",
            "Weapons are customized at a weapons workbench. Receivers, barrels, stocks and sights "
            "each change damage, range, accuracy or weight. Perks like Gun Nut unlock better parts.",
            ["weapon", "modding", "workbench", "receiver", "barrel", "gun nut"],
        ),
        _entry(
            "weapon-compatibility",
            "Weapon Mod Compatibility",
            "Several weapon mods touching the same leveled lists can conflict. Check descriptions "
            "for known conflicts, install compatibility patches and keep framework mods early in "
            "the load order.",
            ["weapon", "compatibility", "conflict", "patch", "leveled lists"],
        ),
    ],
)

SETTLEMENT_MODULE = ModuleDefinition(
    id="settlement-mods-module",
    name="Settlement Modifications",
    description="Settlement building mods and supply lines",
    author=BUILTIN_AUTHOR,
    entries=[
        _entry(
            "settlement-mods",
            "Essential Settlement Mods",
            "Place Everywhere removes building restrictions, Settlement Menu Manager keeps the "
            "workshop menu clean and Sim Settlements 2 adds plot-based city building with a full "
            "questline.",
            ["settlement", "building", "workshop", "place everywhere", "sim settlements"],
        ),
        _entry(
            "supply-lines",
            "Settlement Supply Lines",
            "Supply lines connect settlements so they share workshop resources. Assigning a "
            "provisioner requires the Local Leader perk.",
            ["supply", "lines", "provisioner", "local leader", "settlement"],
        ),
    ],
)

GRAPHICS_MODULE = ModuleDefinition(
    id="graphics-mods-module",
    name="Graphics Enhancements",
    description="ENB, ReShade and texture packs",
    author=BUILTIN_AUTHOR,
    entries=[
        _entry(
            "enb-basics",
            "ENB Basics",
            "ENB is a post-processing injector that improves lighting and colors. Copy the ENB "
            "binaries into the game folder next to Fallout4.exe, then add an ENB preset. Expect a "
            "noticeable performance cost.",
            ["enb", "graphics", "preset", "lighting", "post-processing"],
        ),
        _entry(
            "texture-optimization",
            "Texture Optimization",
            "Large texture packs can exhaust VRAM. Prefer 2K over 4K textures, pick lite versions "
            "of packs and compress textures with an optimizer to keep frame rates stable.",
            ["textures", "optimization", "vram", "performance", "fps"],
        ),
    ],
)

BUILTIN_MODULES = [
    GENERAL_MODULE,
    TOOLS_MODULE,
    ARMOR_MODULE,
    WEAPONS_MODULE,
    SETTLEMENT_MODULE,
    GRAPHICS_MODULE,
]
