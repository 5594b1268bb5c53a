"""Configuration validation for puzzle-search."""

import logging
from omegaconf import DictConfig

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_puzzles_config(config.get('puzzles', {}))
        validate_development_config(config.get('development', {}))

        logger.debug("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section."""
    if not search_config:
        return

    astar_config = search_config.get('astar', {})
    if not astar_config:
        return

    max_time = astar_config.get('max_computation_time', 3600.0)
    if isinstance(max_time, bool) or not isinstance(max_time, (int, float)) or max_time < 0:
        raise ConfigValidationError(
            f"astar.max_computation_time must be a non-negative number, got {max_time}"
        )

    max_states = astar_config.get('max_visited_states', None)
    if max_states is not None and (isinstance(max_states, bool) or
                                   not isinstance(max_states, int) or max_states <= 0):
        raise ConfigValidationError(
            f"astar.max_visited_states must be null or positive integer, got {max_states}"
        )


def validate_puzzles_config(puzzles_config: DictConfig) -> None:
    """Validate puzzle defaults section."""
    if not puzzles_config:
        return

    eight_puzzle = puzzles_config.get('eight_puzzle', {})
    if eight_puzzle and eight_puzzle.get('goal') is not None:
        goal = list(eight_puzzle.get('goal'))
        if sorted(goal) != list(range(9)):
            raise ConfigValidationError(
                f"eight_puzzle.goal must be a permutation of 0..8, got {goal}"
            )


def validate_development_config(dev_config: DictConfig) -> None:
    """Validate development section."""
    if not dev_config:
        return

    seed = dev_config.get('random_seed', None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ConfigValidationError(
            f"random_seed must be null or non-negative integer, got {seed}"
        )