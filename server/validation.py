"""
Validation utilities for server-side input validation.

These never raise: each returns whether the input was valid, what was wrong,
and a corrected value the server can fall back to.
"""
from typing import Any, Dict, Optional, Tuple

from snakegame.config import ALIASES
from snakegame.grid import MIN_GRID_SIZE

# Numeric game settings and their allowed ranges
CONSTRAINTS = {
    'board_size': {'min': 40, 'max': 2000, 'default': 400},
    'block_size': {'min': 5, 'max': 200, 'default': 20},
    'fps': {'min': 1, 'max': 60, 'default': 10},
}

CONTROL_MODES = ('human', 'autoplay')


def _validate_number(key: str, value: Any) -> Tuple[bool, Optional[str], float]:
    constraint = CONSTRAINTS[key]
    if isinstance(value, bool):
        return False, f"{key} must be a number", constraint['default']
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False, f"{key} must be a number", constraint['default']

    if value != value:  # NaN
        return False, f"{key} must be a number", constraint['default']
    if value < constraint['min']:
        return False, f"{key} must be at least {constraint['min']}", constraint['min']
    if value > constraint['max']:
        return False, f"{key} must be at most {constraint['max']}", constraint['max']
    return True, None, value


def validate_board_size(size: Any) -> Tuple[bool, Optional[str], float]:
    """
    Validate the board size in pixels.

    Returns:
        (is_valid, error_message, corrected_value)
    """
    return _validate_number('board_size', size)


def validate_block_size(size: Any) -> Tuple[bool, Optional[str], float]:
    """
    Validate the block (cell) size in pixels.

    Returns:
        (is_valid, error_message, corrected_value)
    """
    return _validate_number('block_size', size)


def validate_fps(fps: Any) -> Tuple[bool, Optional[str], float]:
    """
    Validate the tick rate.

    Returns:
        (is_valid, error_message, corrected_value)
    """
    return _validate_number('fps', fps)


def validate_seed(seed: Any) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate an optional random seed.

    Returns:
        (is_valid, error_message, corrected_value); invalid seeds become None
    """
    if seed is None or seed == '':
        return True, None, None
    if isinstance(seed, bool):
        return False, "Seed must be an integer", None
    try:
        return True, None, int(seed)
    except (TypeError, ValueError):
        return False, "Seed must be an integer", None


def validate_control_mode(mode: Any) -> Tuple[bool, Optional[str], str]:
    """
    Validate a control mode.

    Returns:
        (is_valid, error_message, corrected_value)
    """
    if mode in CONTROL_MODES:
        return True, None, mode
    return False, f"Control mode must be one of {', '.join(CONTROL_MODES)}", 'human'


def validate_game_settings(data: Dict[str, Any]) -> Tuple[bool, Dict[str, str], Dict[str, Any]]:
    """
    Validate the settings sent with 'init'.

    camelCase keys from the browser are mapped to their snake_case names
    first. Missing keys get defaults. Sizes are checked on their own and then
    together, since the board must hold at least two blocks per side.
    Without a control_mode, a truthy autoplay picks autoplay mode.

    Args:
        data: Raw settings from the client

    Returns:
        (is_valid, errors_dict, corrected_settings)
    """
    data = {ALIASES.get(key, key): value for key, value in (data or {}).items()}
    errors = {}
    corrected = {}

    for key, constraint in CONSTRAINTS.items():
        value = data.get(key, constraint['default'])
        is_valid, error, value = _validate_number(key, value)
        if not is_valid:
            errors[key] = error
        corrected[key] = value

    if corrected['board_size'] // corrected['block_size'] < MIN_GRID_SIZE:
        errors['block_size'] = f"Board must hold at least {MIN_GRID_SIZE} blocks per side"
        corrected['block_size'] = CONSTRAINTS['block_size']['default']
        corrected['board_size'] = max(corrected['board_size'], corrected['block_size'] * MIN_GRID_SIZE)

    is_valid, error, corrected['seed'] = validate_seed(data.get('seed'))
    if not is_valid:
        errors['seed'] = error

    is_valid, error, corrected['control_mode'] = validate_control_mode(
        data.get('control_mode', 'autoplay' if data.get('autoplay') else 'human'))
    if not is_valid:
        errors['control_mode'] = error

    corrected['autoplay'] = corrected['control_mode'] == 'autoplay'
    corrected['show_grid'] = bool(data.get('show_grid', False))

    return len(errors) == 0, errors, corrected
