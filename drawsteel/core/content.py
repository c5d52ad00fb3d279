"""
Content repository for the rules engine.

Loads the system settings, the skill registry and the translation tables
from JSON data files, and exposes them by-name to the rest of the engine.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from .constants import DiceFulfillment
from .logging import log_debug, log_info
from .utils import Singleton

# Directory holding the data files shipped with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class SystemSettings(BaseModel):
    """Client-level settings of the game system."""

    user_id: str = Field(
        "gamemaster",
        description="Identifier of the user making the rolls.",
    )
    language: str = Field(
        "en",
        description="Language of the translation table to load.",
    )
    dice_fulfillment: DiceFulfillment = Field(
        DiceFulfillment.DIGITAL,
        description="Whether dice are rolled digitally or entered by hand.",
    )
    verbose_level: int = Field(
        0,
        description="Detail of roll output: 0 tier only, 1 adds the dice, 2 adds the formula.",
    )


class SkillEntry(BaseModel):
    """A skill that can be chosen when making a test."""

    id: str = Field(
        description="The identifier of the skill.",
    )
    label: str = Field(
        description="The display label of the skill.",
    )
    group: str = Field(
        "",
        description="The skill group (crafting, exploration, ...).",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if not self.label:
            raise ValueError("label must be a non-empty string")


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for the settings, skills and translations the roll
    engine needs fast access to.
    """

    settings: SystemSettings
    skills: dict[str, SkillEntry]
    translations: dict[str, str]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing data files to load. The packaged
                data is used on first use when none is given.

        """
        if data_dir:
            self.reload(Path(data_dir))
        elif not hasattr(self, "data_dir"):
            self.reload(DEFAULT_DATA_DIR)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.
        """
        self.data_dir = root
        self.settings = _load_json_file(
            root / "settings.json",
            self._load_settings,
            "settings",
        )
        self.skills = _load_json_file(
            root / "skills.json",
            self._load_skills,
            "skills",
        )
        self.translations = _load_json_file(
            root / "lang" / f"{self.settings.language}.json",
            self._load_translations,
            "translations",
        )
        log_info(
            f"Loaded {len(self.skills)} skills and {len(self.translations)} translations",
            {"data_dir": str(root), "language": self.settings.language},
        )

    def get_skill(self, skill_id: str) -> SkillEntry | None:
        """Get a skill by identifier, or None if not found."""
        return self.skills.get(skill_id)

    def get_translation(self, key: str) -> str | None:
        """Get the translated text of an i18n key, or None if not found."""
        return self.translations.get(key)

    @staticmethod
    def _load_settings(data: dict[str, Any]) -> SystemSettings:
        """
        Load the system settings from JSON data.

        Args:
            data (dict[str, Any]): The settings mapping.

        Returns:
            SystemSettings: The validated settings.

        """
        return SystemSettings(**data)

    @staticmethod
    def _load_skills(data: list[dict]) -> dict[str, SkillEntry]:
        """
        Load skills from JSON data.

        Args:
            data (list[dict]): List of skill data dictionaries.

        Returns:
            dict[str, SkillEntry]: Dictionary mapping skill ids to entries.

        Raises:
            ValueError: If duplicate skill ids are found.

        """
        skills: dict[str, SkillEntry] = {}
        for skill_data in data:
            skill = SkillEntry(**skill_data)
            if skill.id in skills:
                raise ValueError(f"Duplicate skill id: {skill.id}")
            skills[skill.id] = skill
        return skills

    @staticmethod
    def _load_translations(data: dict[str, Any]) -> dict[str, str]:
        """
        Load a flat translation table, skipping non-string entries.

        Args:
            data (dict[str, Any]): Mapping of i18n keys to texts.

        Returns:
            dict[str, str]: The translation table.

        """
        translations: dict[str, str] = {}
        for key, text in data.items():
            if not isinstance(text, str):
                log_warning(
                    f"Ignoring non-string translation for '{key}'.",
                    {"key": key, "type": type(text).__name__},
                )
                continue
            translations[key] = text
        return translations


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[Any], Any],
    description: str,
) -> Any:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description} using {loader_func.__name__}...")
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, (list, dict)):
            raise ValueError(
                f"Expected list or object in {filepath}, got {type(data).__name__}"
            )
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError, TypeError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
