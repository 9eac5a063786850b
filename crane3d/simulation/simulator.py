import logging

import numpy as np

from crane3d.core.base import CraneBase
from crane3d.core.model import CraneModel
from crane3d.core.state import ModelState
from crane3d.visualization.visualizer import CraneVisualizer

logger = logging.getLogger(__name__)


class CraneSimulation(CraneBase):
    """
    Drives a CraneModel with a piecewise-constant force schedule and records
    every returned state.
    """

    def __init__(self, params: dict = None):
        super().__init__(params)

        self.model = CraneModel(self.params)

        self.mode = self.simulation_parameters['mode']
        if self.mode not in ('fixed', 'variable'):
            raise ValueError(f"Unknown simulation mode: {self.mode}")

        self.t_end = self.simulation_parameters['duration']
        self.frame_time = self.simulation_parameters['frame_time']
        self.fixed_time_step = self.simulation_parameters['fixed_time_step']
        self.force_schedule = sorted(self.simulation_parameters['forces'], key=lambda segment: segment['start'])

        self.num_frames = int(round(self.t_end / self.frame_time))

        self.reset()

    def reset(self):
        """Reset the model and the recorded data."""
        self.model.reset()
        self.t_values = np.arange(self.num_frames + 1) * self.frame_time
        self.state_values = np.zeros((self.num_frames + 1, len(ModelState.FIELDS)))
        self.force_values = np.zeros((self.num_frames + 1, 3))

        self.state_values[0] = self.model.get_state().as_array()

    def forces_at(self, t: float):
        """
        Args:
            t: Simulation time

        Returns:
            Tuple (f_rail, f_cart, f_wind) of the last schedule segment started at or before t
        """
        forces = (0.0, 0.0, 0.0)
        for segment in self.force_schedule:
            if segment['start'] > t:
                break
            forces = (segment.get('rail', 0.0), segment.get('cart', 0.0), segment.get('wind', 0.0))
        return forces

    def simulate(self, print_data=None):
        """
        Run the simulation with the configured parameters.

        Args:
            print_data: Whether to log and plot the results

        Returns:
            Recorded states, one row per frame ordered as ModelState.FIELDS
        """
        self.reset()

        for i in range(1, self.num_frames + 1):
            f_rail, f_cart, f_wind = self.forces_at(self.t_values[i - 1])
            self.force_values[i - 1] = (f_rail, f_cart, f_wind)

            if self.mode == 'fixed':
                state = self.model.update_fixed(self.fixed_time_step, self.frame_time, f_rail, f_cart, f_wind)
            else:
                state = self.model.update(self.frame_time, f_rail, f_cart, f_wind)

            self.state_values[i] = state.as_array()

        self.force_values[-1] = self.forces_at(self.t_values[-1])

        if print_data:
            self.print_results()
            self.visualize_results()

        return self.state_values

    def print_results(self):
        """Log key results from the simulation."""
        final_state = self.model.get_state()
        max_alfa = np.rad2deg(np.max(np.abs(self.state_values[:, 0])))
        max_beta = np.rad2deg(np.max(np.abs(self.state_values[:, 1])))

        logger.info(f"Model {self.model.type.value}, {self.mode} step, {self.num_frames} frames")
        logger.info(f"Final state: {final_state}")
        logger.info(f"Maximum absolute value of alfa: {max_alfa:.4f} degrees")
        logger.info(f"Maximum absolute value of beta: {max_beta:.4f} degrees")
        if self.mode == 'fixed':
            logger.info(f"Fixed steps taken: {self.model.simulation_counter}")

    def visualize_results(self):
        """Generate plots and the workbook of the simulation results."""
        if self.visualization_parameters['save_plots']:
            visualizer = CraneVisualizer(self.params)
            visualizer.plot_results(self.t_values, self.state_values, self.force_values)
