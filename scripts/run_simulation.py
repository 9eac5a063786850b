import argparse
import logging

import yaml

from crane3d.simulation.simulator import CraneSimulation


def main():
    parser = argparse.ArgumentParser(description="Run the 3D crane model under a force schedule")
    parser.add_argument('--config', default='config/simulation_params.yaml')
    parser.add_argument('--model', help="Override the model type, e.g. nonlinear_complete")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    config = load_config(args.config)
    if args.model:
        config.setdefault('model', {})['type'] = args.model

    simulation = CraneSimulation(config)
    simulation.simulate(print_data=True)


def load_config(config_path: str) -> dict:
    with open(config_path, 'r') as config_file:
        return yaml.safe_load(config_file)


if __name__ == "__main__":
    main()
