import logging
import os

import numpy as np
import matplotlib.pyplot as plt
import openpyxl

logger = logging.getLogger(__name__)


def generate_folder_name(params):
    physical_params = params['crane_system']['physical_params']
    initial_conditions = params['crane_system']['initial_conditions']
    simulation_parameters = params['simulation']

    folder_name = (
        f"{params['model']['type']}_"
        f"{simulation_parameters['mode']}_"
        f"mp{physical_params['masses']['payload']}_"
        f"mc{physical_params['masses']['cart']}_"
        f"mr{physical_params['masses']['rail']}_"
        f"il{initial_conditions['lift_line']:.2f}_"
        f"d{simulation_parameters['duration']:.1f}"
    )

    return folder_name


class CraneVisualizer:
    def __init__(self, params):
        self.params = params
        self.visualization_parameters = params['visualizer']

        folder_name = generate_folder_name(params)
        self.output_dir = os.path.join(self.visualization_parameters['output_dir'], folder_name)
        os.makedirs(self.output_dir, exist_ok=True)

    def plot_results(self, t_values, state_values, force_values):
        """
        Save one plot per quantity group and a workbook with the same data.

        Args:
            t_values: Frame times
            state_values: Recorded states, ordered as ModelState.FIELDS
            force_values: Applied forces (rail, cart, wind) per frame
        """
        data = {
            'Swing Angles': (np.rad2deg(state_values[:, 0:2]), ['Alfa (deg)', 'Beta (deg)']),
            'Offsets': (state_values[:, 2:5], ['Rail Offset', 'Cart Offset', 'Lift Line']),
            'Payload': (state_values[:, 5:8], ['Payload X', 'Payload Y', 'Payload Z']),
            'Forces': (force_values, ['Rail Force', 'Cart Force', 'Winding Force']),
        }

        wb = openpyxl.Workbook()
        wb.remove(wb.active)  # Remove default sheet

        for sheet_name, (values, labels) in data.items():
            ws = wb.create_sheet(title=sheet_name)
            ws.append(['Time'] + labels)
            for time, row in zip(t_values, values):
                ws.append([float(time)] + [float(v) for v in row])

            plt.figure(figsize=(12, 8))
            for val, label in zip(values.T, labels):
                plt.plot(t_values, val, label=label)
            plt.xlabel('Time (s)')
            plt.ylabel(sheet_name)
            plt.title(sheet_name)
            plt.legend()
            plt.grid(True)
            plt.savefig(os.path.join(self.output_dir, f'{sheet_name.lower().replace(" ", "_")}.png'))
            plt.close()

        wb.save(os.path.join(self.output_dir, 'crane_simulation_data.xlsx'))
        logger.info(f"Data saved to Excel and plots generated successfully in folder: {self.output_dir}")
