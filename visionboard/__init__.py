from .model import (
    CARD_KINDS,
    BoardError,
    BoardFormatError,
    Card,
    ConfigError,
    DragError,
    LayoutBounds,
    PhysicsConfig,
    QuadraticCurve,
)
from .config import get_physics_config, reset_physics_config, set_physics_config
from .physics import (
    SettleResult,
    focal_point,
    is_settled,
    kinetic_energy,
    layout_bounds,
    settle,
    step,
)
from .paths import connection_path, iter_links
from .board import (
    DragController,
    add_goal,
    connect,
    create_card,
    disconnect,
    remove_card,
    update_card,
)
from .host import BOTTOM_PANEL_HEIGHT, BoardSession, FrameThrottle, simulation_viewport
from .storage import dump_board, example_board, load_board, parse_board, save_board
from .tikz_codegen import generate_tikz_code, generate_tikz_document

__all__ = [
    'CARD_KINDS',
    'BoardError',
    'BoardFormatError',
    'Card',
    'ConfigError',
    'DragError',
    'LayoutBounds',
    'PhysicsConfig',
    'QuadraticCurve',
    'get_physics_config',
    'set_physics_config',
    'reset_physics_config',
    'SettleResult',
    'focal_point',
    'is_settled',
    'kinetic_energy',
    'layout_bounds',
    'settle',
    'step',
    'connection_path',
    'iter_links',
    'DragController',
    'add_goal',
    'connect',
    'create_card',
    'disconnect',
    'remove_card',
    'update_card',
    'BOTTOM_PANEL_HEIGHT',
    'BoardSession',
    'FrameThrottle',
    'simulation_viewport',
    'dump_board',
    'example_board',
    'load_board',
    'parse_board',
    'save_board',
    'generate_tikz_code',
    'generate_tikz_document',
]
