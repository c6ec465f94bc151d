"""
This module runs the data-parallel phases of a simulation step.

The ForcePool class splits the body index range into contiguous blocks and runs one phase
function over every block, either inline (one worker) or on a thread pool. run_phase only
returns after every block of the phase has finished, which makes each call a full barrier:
no block of the next phase can start while a block of the current one is still running.
Worker exceptions are re-raised to the caller after the barrier. Threads share the
body store arrays directly; the numpy kernels release the GIL while they work, and blocks
of one phase never write overlapping rows, so no locking is needed. A pool that is
garbage collected without shutdown stops its executor through a weakref finalizer.
"""

from __future__ import annotations
import math
import os
import weakref
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Dict, List

import numpy as np




class ForcePool:
	def __init__(self, n_workers: int = 0, block_rows: int = 256) -> None:
		n_workers = int(n_workers)
		if n_workers <= 0:
			n_workers = os.cpu_count() or 1
		self.n_workers = n_workers
		self.block_rows = max(1, int(block_rows))
		self._executor: ThreadPoolExecutor | None = None
		self._finalizer: weakref.finalize | None = None
		self._blocks: Dict[int, List[np.ndarray]] = {}
		self.phases_run = 0

	@property
	def is_parallel(self) -> bool:
		return self.n_workers > 1

	def blocks(self, n: int) -> List[np.ndarray]:
		n = int(n)
		cached = self._blocks.get(n)
		if cached is not None:
			return cached
		if n <= 0:
			out: List[np.ndarray] = []
		else:
			n_blocks = max(math.ceil(n / self.block_rows), min(self.n_workers, n))
			out = np.array_split(np.arange(n, dtype=np.intp), n_blocks)
		self._blocks = {n: out}
		return out

	def run_phase(self, fn: Callable[[np.ndarray], None], blocks: List[np.ndarray]) -> None:
		self.phases_run += 1
		if not self.is_parallel or len(blocks) <= 1:
			for rows in blocks:
				fn(rows)
			return

		if self._executor is None:
			self._executor = ThreadPoolExecutor(
				max_workers=self.n_workers,
				thread_name_prefix="gravdisk-worker",
			)
			self._finalizer = weakref.finalize(self, self._executor.shutdown, wait=False)
		futures = [self._executor.submit(fn, rows) for rows in blocks]
		wait(futures)
		for fut in futures:
			fut.result()

	def shutdown(self) -> None:
		if self._finalizer is not None:
			self._finalizer.detach()
			self._finalizer = None
		if self._executor is not None:
			self._executor.shutdown(wait=True)
			self._executor = None
