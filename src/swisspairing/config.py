"""Engine configuration."""

# Swiss Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from swisspairing.constants import (
    BYE_SCORE,
    DEFAULT_MAX_BACKTRACK_STEPS,
    DEFAULT_MAX_EXCHANGE_NODES,
    DEFAULT_MAX_FLOATER_OPTIONS,
)
from swisspairing.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from swisspairing.type_hints import BLACK, WHITE
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_positive_integer, validate_score

logger = setup_logger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Pairing engine configuration settings.

    Attributes
    ----------
    bye_score : float
        Points credited for a pairing-allocated bye (0.0, 0.5 or 1.0).
    initial_color : str
        Colour given to the higher-rated player of board 1 when first round
        colours alternate by board.
    alternate_first_round_colors : bool
        Alternate first round colours by board instead of applying the
        regular colour rules (which give white to the lower registration id).
    max_floater_options : int
        Maximum number of downfloater sets tried per floater count in a
        score group.
    max_exchange_nodes : int
        Maximum number of nodes visited by one exchange search.
    max_backtrack_steps : int
        Maximum number of score group attempts across the whole round.
    """

    bye_score: float = BYE_SCORE
    initial_color: str = WHITE
    alternate_first_round_colors: bool = False
    max_floater_options: int = DEFAULT_MAX_FLOATER_OPTIONS
    max_exchange_nodes: int = DEFAULT_MAX_EXCHANGE_NODES
    max_backtrack_steps: int = DEFAULT_MAX_BACKTRACK_STEPS

    def __post_init__(self) -> None:
        score_result = validate_score(self.bye_score)
        if not score_result:
            raise InvalidConfigurationException(
                f"bye_score: {score_result.error_message}"
            )
        if self.initial_color not in (WHITE, BLACK):
            raise InvalidConfigurationException(
                f"initial_color must be {WHITE!r} or {BLACK!r}: {self.initial_color!r}"
            )
        for name in ("max_floater_options", "max_exchange_nodes", "max_backtrack_steps"):
            result = validate_positive_integer(getattr(self, name), name)
            if not result:
                raise InvalidConfigurationException(result.error_message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "bye_score": self.bye_score,
            "initial_color": self.initial_color,
            "alternate_first_round_colors": self.alternate_first_round_colors,
            "max_floater_options": self.max_floater_options,
            "max_exchange_nodes": self.max_exchange_nodes,
            "max_backtrack_steps": self.max_backtrack_steps,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary.

        Colours are accepted case-insensitively ("white", "B", ...).
        """
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        try:
            return cls(
                bye_score=float(data.get("bye_score", BYE_SCORE)),
                initial_color=_parse_color(data.get("initial_color", WHITE)),
                alternate_first_round_colors=bool(
                    data.get("alternate_first_round_colors", False)
                ),
                max_floater_options=int(
                    data.get("max_floater_options", DEFAULT_MAX_FLOATER_OPTIONS)
                ),
                max_exchange_nodes=int(
                    data.get("max_exchange_nodes", DEFAULT_MAX_EXCHANGE_NODES)
                ),
                max_backtrack_steps=int(
                    data.get("max_backtrack_steps", DEFAULT_MAX_BACKTRACK_STEPS)
                ),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationException(str(exc)) from exc


def _parse_color(value: str) -> str:
    key = str(value).strip().lower()
    if key in ("white", "w"):
        return WHITE
    if key in ("black", "b"):
        return BLACK
    raise InvalidConfigurationException(f"Invalid initial_color: {value!r}")


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Load an :class:`EngineConfig` from a JSON file.

    Raises
    ------
    MissingConfigurationException
        If the file does not exist.
    InvalidConfigurationException
        If the file is not valid JSON or holds invalid settings.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.error("Configuration file not found: %s", config_path)
        raise MissingConfigurationException(
            f"Configuration file not found: {config_path}"
        )
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse configuration %s: %s", config_path, exc)
        raise InvalidConfigurationException(
            f"Invalid JSON in {config_path}: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Configuration in {config_path} must be a JSON object"
        )
    config = EngineConfig.from_dict(data)
    logger.info("Loaded configuration from: %s", config_path)
    return config
