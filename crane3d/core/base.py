"""
Base classes for the crane simulation system.
"""
import copy
from abc import ABC, abstractmethod

# Approximate profile of the Inteco 3DCrane laboratory rig (SI units)
DEFAULT_PARAMS = {
    'crane_system': {
        'physical_params': {
            'gravity': 9.81,
            'masses': {
                'payload': 1.000,  # Mc mass of the payload
                'cart': 1.155,     # Mw mass of the cart
                'rail': 2.200,     # Ms mass of the moving rail
            },
        },
        'friction': {
            'rail': 100.0,    # Tx rail friction
            'cart': 82.0,     # Ty cart friction
            'winding': 75.0,  # Tr lift-line winding friction
            # steel on steel, dry surface
            'static_dry_steel': 0.7,
            'kinetic_dry_steel': 0.6,
            'damping': 0.9999,
        },
        'limits': {
            'rail': {'min': -0.30, 'max': 0.30},
            'cart': {'min': -0.35, 'max': 0.35},
            'line': {'min': 0.05, 'max': 0.90},
        },
        'initial_conditions': {
            'rail_offset': 0.0,
            'cart_offset': 0.0,
            'lift_line': 0.5,
            'alfa': 0.0,
            'beta': 0.0,
        },
    },
    'model': {
        'type': 'linear',
        'integration_method': 'semi_implicit_euler',
    },
    'simulation': {
        'mode': 'fixed',
        'duration': 10.0,
        'frame_time': 1.0 / 60.0,
        'fixed_time_step': 0.01,
        'forces': [
            {'start': 0.0, 'rail': 0.0, 'cart': 0.0, 'wind': 0.0},
        ],
    },
    'visualizer': {
        'save_plots': False,
        'output_dir': 'simulation_plots',
    },
}


def merge_params(defaults: dict, overrides: dict) -> dict:
    """
    Recursively merge overrides into a copy of defaults.

    Args:
        defaults: Base configuration
        overrides: Partial configuration, nested the same way

    Returns:
        New merged configuration dictionary
    """
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_params(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class CraneBase:
    """Base class for all crane-related components."""

    def __init__(self, params: dict = None):
        """
        Initialize the crane base with configuration parameters.

        Args:
            params: Dictionary containing configuration parameters, merged over DEFAULT_PARAMS
        """
        self.params = merge_params(DEFAULT_PARAMS, params)
        self.physical_parameters = self.params['crane_system']['physical_params']
        self.friction_parameters = self.params['crane_system']['friction']
        self.limits_parameters = self.params['crane_system']['limits']
        self.initial_conditions_parameters = self.params['crane_system']['initial_conditions']
        self.model_parameters = self.params['model']
        self.simulation_parameters = self.params['simulation']
        self.visualization_parameters = self.params['visualizer']


class ModelInterface(ABC):
    """Interface for crane dynamic models."""

    @abstractmethod
    def update(self, delta_time, f_rail, f_cart, f_wind):
        """
        Advance the model by one step of delta_time.

        Returns:
            New state of the crane model
        """
        pass

    @abstractmethod
    def update_fixed(self, fixed_time, delta_time, f_rail, f_cart, f_wind):
        """
        Advance the model by delta_time using steps of fixed_time.

        Returns:
            New state of the crane model
        """
        pass

    @abstractmethod
    def get_state(self):
        """
        Returns:
            Current state of the crane model
        """
        pass
