from .sim_config import SimConfig
from .simulation import NBodySimulation

"""
This module is the console entry point for running a disk scene. main builds a simulation from the SimConfig defaults, advances it for a fixed number of steps while recording diagnostics at a regular interval, prints the relative energy drift and the largest acceleration seen, and writes the diagnostic history to CSV. It is a smoke run for the engine, not a visualisation front end.

"""


def main(n_steps: int = 1000, record_every: int = 100, csv_path: str = "energy_history.csv"):
	cfg = SimConfig()

	print(f"Initializing {cfg.n_bodies} bodies (seed={cfg.seed})...")
	with NBodySimulation(cfg=cfg) as sim:
		if not sim.is_valid:
			print("[error] Simulation could not be initialized")
			return

		sim.diagnostics.record()
		print(f"Running {n_steps} steps with dt={cfg.dt}...")
		done = sim.run(n_steps, cfg.dt, record_every=record_every)

		df = sim.diagnostics.history_frame()
		print(f"Completed {done} steps, t={sim.time:.4f}")
		print(f"Energy drift: {df['drift'].iloc[-1]:.3e}")
		print(f"Max acceleration: {df['max_acc'].max():.3e}")

		sim.diagnostics.save_history(csv_path)


if __name__ == "__main__":
	main()
